from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import quote

from .types import Header, RenderOptions

logger = logging.getLogger(__name__)

# ============================================================================
# Colours
# ============================================================================


@dataclass(slots=True)
class DiagramColors:
    """Diagram color configuration.

    bg + fg alone give a clean monochrome diagram; line, accent, muted,
    surface and border refine it.
    """

    bg: str
    fg: str
    line: str | None = None
    accent: str | None = None
    muted: str | None = None
    surface: str | None = None
    border: str | None = None


DEFAULTS = {"bg": "#FFFFFF", "fg": "#27272A"}

# color-mix() weights for derived CSS variables
MIX = {
    "text_muted": 40,
    "line": 30,
    "arrow": 50,
    "box_fill": 3,
    "box_stroke": 20,
    "activation_fill": 8,
}

# Palettes selectable with ":theme <name>" or --theme
THEMES: dict[str, DiagramColors] = {
    "default": DiagramColors(bg=DEFAULTS["bg"], fg=DEFAULTS["fg"]),
    "zinc-dark": DiagramColors(bg="#18181B", fg="#FAFAFA"),
    "nord": DiagramColors(
        bg="#2e3440", fg="#d8dee9",
        line="#4c566a", accent="#88c0d0", muted="#616e88",
    ),
    "dracula": DiagramColors(
        bg="#282a36", fg="#f8f8f2",
        line="#6272a4", accent="#bd93f9", muted="#6272a4",
    ),
    "github-light": DiagramColors(
        bg="#ffffff", fg="#1f2328",
        line="#d1d9e0", accent="#0969da", muted="#59636e",
    ),
    "github-dark": DiagramColors(
        bg="#0d1117", fg="#e6edf3",
        line="#3d444d", accent="#4493f8", muted="#9198a1",
    ),
    "solarized-light": DiagramColors(
        bg="#fdf6e3", fg="#657b83",
        line="#93a1a1", accent="#268bd2", muted="#93a1a1",
    ),
}


def resolve_colors(options: RenderOptions, header: Header | None = None) -> DiagramColors:
    """Pick the palette for a render.

    Precedence: options.theme, then the diagram's ":theme" line, then the
    defaults. Explicit colour fields on ``options`` override the palette.
    """
    theme_name = options.theme or (header.theme if header else None)
    base = DiagramColors(bg=DEFAULTS["bg"], fg=DEFAULTS["fg"])
    if theme_name:
        key = theme_name.strip().lower()
        if key in THEMES:
            base = THEMES[key]
        else:
            logger.warning("Unknown theme %r, using defaults", theme_name)

    return DiagramColors(
        bg=options.bg or base.bg,
        fg=options.fg or base.fg,
        line=options.line or base.line,
        accent=options.accent or base.accent,
        muted=options.muted or base.muted,
        surface=options.surface or base.surface,
        border=options.border or base.border,
    )


# ============================================================================
# SVG style block
# ============================================================================


def build_style_block(font: str) -> str:
    """Build the CSS variable derivation rules for the SVG <style> block."""
    derived_vars = f"""
    /* Derived from --bg and --fg (overridable via --line, --accent, etc.) */
    --_text:          var(--fg);
    --_text-muted:    var(--muted, color-mix(in srgb, var(--fg) {MIX["text_muted"]}%, var(--bg)));
    --_line:          var(--line, color-mix(in srgb, var(--fg) {MIX["line"]}%, var(--bg)));
    --_arrow:         var(--accent, color-mix(in srgb, var(--fg) {MIX["arrow"]}%, var(--bg)));
    --_box-fill:      var(--surface, color-mix(in srgb, var(--fg) {MIX["box_fill"]}%, var(--bg)));
    --_box-stroke:    var(--border, color-mix(in srgb, var(--fg) {MIX["box_stroke"]}%, var(--bg)));
    --_activation:    color-mix(in srgb, var(--fg) {MIX["activation_fill"]}%, var(--bg));"""

    return "\n".join([
        "<style>",
        f"  @import url('https://fonts.googleapis.com/css2?family={quote(font)}:wght@400;500;600&amp;display=swap');",
        f"  text {{ font-family: '{font}', system-ui, sans-serif; }}",
        f"  svg {{{derived_vars}",
        "  }",
        "</style>",
    ])


def svg_open_tag(
    width: float,
    height: float,
    colors: DiagramColors,
    transparent: bool = False,
) -> str:
    """Build the SVG opening tag with CSS variables set as inline styles."""
    vars_parts = [
        f"--bg:{colors.bg}",
        f"--fg:{colors.fg}",
    ]
    for name in ("line", "accent", "muted", "surface", "border"):
        value = getattr(colors, name)
        if value:
            vars_parts.append(f"--{name}:{value}")

    vars_str = ";".join(vars_parts)
    bg_style = "" if transparent else ";background:var(--bg)"

    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {width} {height}" '
        f'width="{width}" height="{height}" style="{vars_str}{bg_style}">'
    )
