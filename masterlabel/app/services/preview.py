"""
HTML preview rendering.

Renders a ``ResolvedLabel`` to a standalone HTML document for inspection
in a browser. Dimensions are emitted in points so the preview matches the
printed page geometry.

Design guarantees:
- Deterministic template rendering (Jinja2 + StrictUndefined)
- Autoescaping of all bound product data
- No data transformation occurs in this module; resolution happens first
"""

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError, select_autoescape

from masterlabel.app.services.resolver import ResolvedLabel


TEMPLATE_ROOT = Path(__file__).resolve().parent.parent / "templates"

PREVIEW_TEMPLATE = "label_preview.html.jinja"


class PreviewRenderError(RuntimeError):
    """Raised when the preview template fails to render."""


def _css_text_align(alignment: str) -> str:
    return alignment if alignment in ("left", "center", "right") else "left"


def _css_flex_align(alignment: str) -> str:
    if alignment == "center":
        return "center"
    if alignment == "right":
        return "flex-end"
    return "flex-start"


@lru_cache(maxsize=1)
def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_ROOT),
        undefined=StrictUndefined,
        autoescape=select_autoescape(["html", "jinja"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["text_align"] = _css_text_align
    env.filters["flex_align"] = _css_flex_align
    return env


def render_label_html(label: ResolvedLabel) -> str:
    try:
        template = _environment().get_template(PREVIEW_TEMPLATE)
        return template.render(label=label)
    except TemplateError as exc:
        raise PreviewRenderError(f"Label preview rendering failed: {exc}") from exc
