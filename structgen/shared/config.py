"""Generator configuration loaded from ``structgen.yaml``."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Final

from .errors import SchemaConnectionError, SchemaValidationError
from .schema_loader import load_schema

DEFAULT_CONFIG_PATH: Final[Path] = Path("structgen.yaml")
DEFAULT_OUTPUT_DIR: Final[Path] = Path("structs")
DEFAULT_PACKAGE: Final[str] = "structs"


@dataclass(frozen=True, slots=True)
class EnvironmentConfig:
    """Connection target for one environment."""

    name: str
    url: str
    schema: str | None = None


@dataclass
class GeneratorConfig:
    """Settings shared by the generator commands."""

    output_dir: Path = DEFAULT_OUTPUT_DIR
    package: str = DEFAULT_PACKAGE
    environments: dict[str, EnvironmentConfig] = field(default_factory=dict)
    type_overrides: dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, path: Path | None = None) -> GeneratorConfig:
        """Load configuration from YAML.

        Without an explicit path the default file is used when present,
        otherwise built-in defaults apply.
        """
        if path is None:
            if not DEFAULT_CONFIG_PATH.is_file():
                return cls()
            path = DEFAULT_CONFIG_PATH
        return cls.from_dict(load_schema(path), str(path))

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str | None = None) -> GeneratorConfig:
        output_dir = data.get("output_dir", str(DEFAULT_OUTPUT_DIR))
        package = data.get("package", DEFAULT_PACKAGE)
        if not isinstance(output_dir, str) or not output_dir:
            raise SchemaValidationError("must be a non-empty string", source, field="output_dir")
        if not isinstance(package, str) or not package.isidentifier():
            raise SchemaValidationError("must be a Go package identifier", source, field="package")

        raw_envs = data.get("environments") or {}
        if not isinstance(raw_envs, dict):
            raise SchemaValidationError("must be a mapping", source, field="environments")
        environments = {
            str(name): _parse_environment(str(name), value, source)
            for name, value in raw_envs.items()
        }

        raw_types = data.get("types") or {}
        if not isinstance(raw_types, dict):
            raise SchemaValidationError("must be a mapping", source, field="types")

        return cls(
            output_dir=Path(output_dir),
            package=package,
            environments=environments,
            type_overrides={str(k): str(v) for k, v in raw_types.items()},
        )

    def environment(self, name: str) -> EnvironmentConfig:
        """Resolve an environment name, or accept a literal SQLAlchemy URL."""
        if name in self.environments:
            return self.environments[name]
        if "://" in name:
            return EnvironmentConfig(name=name, url=name)
        known = ", ".join(sorted(self.environments)) or "none configured"
        raise SchemaConnectionError(name, f"unknown environment (known: {known})")


def _parse_environment(name: str, value: Any, source: str | None) -> EnvironmentConfig:
    if isinstance(value, str):
        return EnvironmentConfig(name=name, url=value)
    if isinstance(value, dict) and isinstance(value.get("url"), str):
        schema = value.get("schema")
        return EnvironmentConfig(
            name=name,
            url=value["url"],
            schema=str(schema) if schema is not None else None,
        )
    raise SchemaValidationError(
        "must be a URL string or a mapping with a 'url' key",
        source,
        field=f"environments.{name}",
    )
