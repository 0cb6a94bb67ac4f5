"""HTML output for content nodes.

Rendered through a Jinja2 template with autoescaping, so text and
attribute values from stored markdown are always escaped. This is basic
tag generation only; it does not sanitize URLs.
"""

from pathlib import Path
from typing import Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape

from podsite.markdown.nodes import ContentNode

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(enabled_extensions=["html"]),
)


def render_html(nodes: Sequence[ContentNode]) -> str:
    """Render a node sequence to an HTML fragment."""
    template = _env.get_template("content.html")
    return template.render(nodes=nodes).strip()
