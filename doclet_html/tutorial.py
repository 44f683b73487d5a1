"""Data model for tutorial pages."""

from dataclasses import dataclass, field

import markdown


@dataclass
class Tutorial:
    """A tutorial page and its child tutorials."""

    name: str
    title: str = ""
    content: str = ""
    content_type: str = "md"  # "md" or "html"
    children: list["Tutorial"] = field(default_factory=list)

    def parse(self) -> str:
        """Render the tutorial content to HTML."""
        if self.content_type == "html":
            return self.content
        return markdown.markdown(
            self.content, extensions=["fenced_code", "tables", "toc"]
        )
