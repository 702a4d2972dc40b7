from pathlib import Path

import pytest

from structgen.shared import config as config_module
from structgen.shared.config import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_PACKAGE,
    EnvironmentConfig,
    GeneratorConfig,
)
from structgen.shared.errors import (
    SchemaConnectionError,
    SchemaError,
    SchemaValidationError,
)


class TestGeneratorConfigLoad:
    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        config = GeneratorConfig.load()
        assert config.output_dir == DEFAULT_OUTPUT_DIR
        assert config.package == DEFAULT_PACKAGE
        assert config.environments == {}
        assert config.type_overrides == {}

    def test_default_file_is_picked_up(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "structgen.yaml").write_text("package: models\n")

        config = GeneratorConfig.load()
        assert config.package == "models"

    def test_explicit_file(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text(
            """
output_dir: generated/structs
package: api
environments:
  production: mysql+pymysql://db.internal:3306/app
  staging:
    url: postgresql+psycopg://db.staging/app
    schema: reporting
types:
  geometry: string
"""
        )

        config = GeneratorConfig.load(path)
        assert config.output_dir == Path("generated/structs")
        assert config.package == "api"
        assert config.environments["production"] == EnvironmentConfig(
            "production", "mysql+pymysql://db.internal:3306/app"
        )
        assert config.environments["staging"].schema == "reporting"
        assert config.type_overrides == {"geometry": "string"}

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(SchemaError) as exc_info:
            GeneratorConfig.load(tmp_path / "missing.yaml")
        assert "Failed to read schema file" in str(exc_info.value)


class TestGeneratorConfigValidation:
    def test_invalid_package(self):
        with pytest.raises(SchemaValidationError) as exc_info:
            GeneratorConfig.from_dict({"package": "not a package"}, "structgen.yaml")
        assert exc_info.value.field == "package"
        assert "[structgen.yaml]" in str(exc_info.value)

    def test_invalid_environments(self):
        with pytest.raises(SchemaValidationError):
            GeneratorConfig.from_dict({"environments": ["production"]})

    def test_invalid_environment_entry(self):
        with pytest.raises(SchemaValidationError) as exc_info:
            GeneratorConfig.from_dict({"environments": {"production": {"host": "db"}}})
        assert exc_info.value.field == "environments.production"

    def test_invalid_types(self):
        with pytest.raises(SchemaValidationError):
            GeneratorConfig.from_dict({"types": "geometry"})


class TestEnvironmentLookup:
    def test_configured_name(self):
        config = GeneratorConfig.from_dict({"environments": {"dev": "sqlite:///dev.db"}})
        assert config.environment("dev").url == "sqlite:///dev.db"

    def test_literal_url(self):
        env = GeneratorConfig().environment("sqlite:///app.db")
        assert env.url == "sqlite:///app.db"
        assert env.schema is None

    def test_unknown_name(self):
        config = GeneratorConfig.from_dict({"environments": {"dev": "sqlite:///dev.db"}})
        with pytest.raises(SchemaConnectionError) as exc_info:
            config.environment("production")
        assert exc_info.value.environment == "production"
        assert "dev" in str(exc_info.value)

    def test_default_config_path(self):
        assert config_module.DEFAULT_CONFIG_PATH == Path("structgen.yaml")
