"""
Jinja2 templates for console report output.

Templates are .j2 files in this directory; use render() to fill them in.
"""

from jinja2 import Environment, FileSystemLoader
from pathlib import Path

_TEMPLATES_DIR = Path(__file__).parent


def _format_versions(versions: dict) -> str:
    """{'chrome': '105', 'safari': '15.4'} -> 'chrome 105, safari 15.4'"""
    return ", ".join(f"{env} {version}" for env, version in versions.items())


_env = Environment(
    loader=FileSystemLoader(_TEMPLATES_DIR),
    autoescape=False,  # Console text, not HTML
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["versions"] = _format_versions


def render(template_name: str, **kwargs) -> str:
    """Render a template from this directory with the given variables."""
    template = _env.get_template(template_name)
    return template.render(**kwargs)
