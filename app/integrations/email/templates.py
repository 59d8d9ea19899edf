"""Jinja2 loader for the HTML email templates."""

from pathlib import Path
from typing import Any, Callable, Dict, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

TEMPLATES_DIR = Path(__file__).parent / "templates"

Renderer = Callable[[Dict[str, Any]], str]


class TemplateLoader:
    """Resolve ``<name>.html`` templates from a directory.

    Missing templates raise ``jinja2.TemplateNotFound`` and syntax errors
    raise ``TemplateSyntaxError``; callers fall back to a plain email.
    """

    def __init__(self, directory: Optional[str] = None):
        self.directory = Path(directory) if directory else TEMPLATES_DIR
        self._environment = Environment(
            loader=FileSystemLoader(str(self.directory)),
            autoescape=select_autoescape(["html"]),
        )

    def load_template(self, name: str) -> Renderer:
        template = self._environment.get_template(f"{name}.html")

        def render(data: Dict[str, Any]) -> str:
            return template.render(**data)

        return render
