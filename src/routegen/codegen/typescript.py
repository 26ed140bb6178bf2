from __future__ import annotations

from routegen.codegen.model import BindingDecl, ClientModule, InterfaceDecl

BANNER = "// " + "=" * 76

HEADER = """/**
 * Auto-generated TypeScript API Client
 * Generated from Python routes
 *
 * DO NOT EDIT MANUALLY - Regenerate using: routegen client
 */
"""


def render_interface(decl: InterfaceDecl) -> str:
    lines = [f"export interface {decl.name} {{"]
    for p in decl.properties:
        optional = "?" if p.optional else ""
        nullable = " | null" if p.nullable else ""
        lines.append(f"  {p.name}{optional}: {p.ts_type}{nullable};")
    lines.append("}")
    return "\n".join(lines) + "\n\n"


def render_url(binding: BindingDecl) -> str:
    if not binding.path_params:
        return f"'{binding.path}'"
    url = binding.path
    for param in binding.path_params:
        url = url.replace("{" + param + "}", "${" + param + "}")
    return f"`{url}`"


def render_params(binding: BindingDecl) -> str:
    params = [f"{p}: string" for p in binding.path_params]
    if binding.has_body:
        params.insert(0, f"data: {binding.request_type}")
    return ", ".join(params)


def render_binding(binding: BindingDecl) -> str:
    lines = [
        f"  async {binding.name}({render_params(binding)}): Promise<{binding.response_type}> {{",
        f"    const response = await fetch({render_url(binding)}, {{",
        f"      method: '{binding.method}',",
        "      headers: {",
        "        'Content-Type': 'application/json',",
        "      },",
    ]
    if binding.has_body:
        lines.append("      body: JSON.stringify(data),")
    lines += [
        "    });",
        "",
        "    if (!response.ok) {",
        "      throw new Error(`HTTP error! status: ${response.status}`);",
        "    }",
        "",
        "    const json = await response.json();",
        "    return json.data;",
        "  },",
    ]
    return "\n".join(lines) + "\n\n"


def render_client(module: ClientModule) -> str:
    """Render a ClientModule as a single TypeScript source file."""
    interfaces = "".join(render_interface(d) for d in module.interfaces)
    bindings = "".join(render_binding(b) for b in module.bindings)

    parts = [
        HEADER.rstrip(),
        "",
        BANNER,
        "// Type Definitions",
        BANNER,
        "",
        interfaces,
        BANNER,
        "// API Client",
        BANNER,
        "",
        "export const api = {",
        bindings + "};",
        "",
        "export default api;",
        "",
    ]
    return "\n".join(parts)
