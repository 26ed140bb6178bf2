from __future__ import annotations

import re
from typing import List

_PARAM = re.compile(r"\{([^}]+)\}")
_PARAM_SEGMENT = re.compile(r"^\{.+\}$")
_WORD_SEP = re.compile(r"[-_\s]+")

# words whose plural and singular coincide, or that have no singular
_UNCOUNTABLE = frozenset(
    {"news", "series", "species", "status", "data", "media", "metadata", "info", "feedback", "settings", "analytics"}
)


def extract_path_params(path: str) -> list[str]:
    """All ``{name}`` placeholders, in order of appearance."""
    return _PARAM.findall(path)


def is_param_segment(seg: str) -> bool:
    return bool(_PARAM_SEGMENT.match(seg))


def singularize(word: str) -> str:
    # items -> item, categories -> category, addresses -> address
    lower = word.lower()
    if lower in _UNCOUNTABLE:
        return word
    if lower.endswith("ies") and len(word) > 3:
        return word[:-3] + "y"
    if lower.endswith(("sses", "shes", "ches", "xes")):
        return word[:-2]
    if lower.endswith("s") and not lower.endswith(("ss", "us", "is")):
        return word[:-1]
    return word


def route_function_name(path: str, method: str) -> str:
    """
    Derive a client binding name from an HTTP method and a path template.

      GET  /login                -> login
      GET  /items/{itemId}/view  -> itemView
      POST /users/{userId}/posts -> postUserPosts
      POST /login                -> postLogin
    """
    segments = [s for s in path.strip("/").split("/") if s]

    words: List[str] = []
    for i, seg in enumerate(segments):
        if is_param_segment(seg):
            continue
        # a collection segment followed by a placeholder addresses one member
        if i + 1 < len(segments) and is_param_segment(segments[i + 1]):
            seg = singularize(seg)
        words.append(_camel_word(seg))

    name = "".join(words)
    if name:
        name = name[0].lower() + name[1:]

    m = method.lower()
    if not name:
        name = m

    if method.upper() != "GET" and not name.startswith(m):
        name = m + name[0].upper() + name[1:]

    return name


def unique_name(name: str, used: dict[str, int]) -> str:
    """Deterministic collision handling: user, user2, user3 ..."""
    used[name] = used.get(name, 0) + 1
    if used[name] == 1:
        return name
    candidate = f"{name}{used[name]}"
    while candidate in used:
        used[name] += 1
        candidate = f"{name}{used[name]}"
    used[candidate] = 1
    return candidate


def _camel_word(seg: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in _WORD_SEP.split(seg) if part)
