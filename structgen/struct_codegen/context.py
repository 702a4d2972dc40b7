"""Template environment shared by the artifact generators."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..shared.config import DEFAULT_PACKAGE

TEMPLATE_DIR: Final[Path] = Path(__file__).parent / "templates"


@dataclass
class GeneratorContext:
    """Context for code generation with cached resources."""

    package: str = DEFAULT_PACKAGE
    template_env: Environment = field(init=False)

    def __post_init__(self) -> None:
        self.template_env = Environment(
            loader=FileSystemLoader(TEMPLATE_DIR),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
            auto_reload=False,
        )

    def render(self, template_name: str, **values: Any) -> str:
        """Render a template with the Go package name in scope.

        A ``package`` keyword overrides the context's package.
        """
        template = self.template_env.get_template(template_name)
        return template.render({"package": self.package, **values})

    def render_fragment(self, template_name: str, **values: Any) -> str:
        """Render a per-table fragment without its trailing newline."""
        return self.render(template_name, **values).rstrip("\n")
