"""Jinja2 rendering of page models into HTML."""

from pathlib import Path
from typing import Any

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, select_autoescape

BUILTIN_TEMPLATES = Path(__file__).parent / "templates"
DEFAULT_LAYOUT = "layout.html"


class TemplateRenderer:
    """Renders named templates; user templates override the bundled ones."""

    def __init__(
        self, templates_dir: str | None = None, layout_file: str | None = None
    ) -> None:
        """Initialize the Jinja2 environment and pick the page layout."""
        loaders = []
        if templates_dir:
            loaders.append(FileSystemLoader(templates_dir))
        if layout_file:
            loaders.append(FileSystemLoader(str(Path(layout_file).parent)))
        loaders.append(FileSystemLoader(str(BUILTIN_TEMPLATES)))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.layout = Path(layout_file).name if layout_file else DEFAULT_LAYOUT

    def add_globals(self, **helpers: Any) -> None:
        """Expose helper functions and shared values to every template."""
        self.env.globals.update(helpers)

    def render(self, template_name: str, model: dict[str, Any]) -> str:
        """Render a template with the given page model."""
        template = self.env.get_template(template_name)
        return template.render(layout=self.layout, **model)
