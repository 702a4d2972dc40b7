import pytest
import yaml

from structgen.schema_provider import DatabaseSchemaProvider, SnapshotSchemaProvider
from structgen.shared import GeneratorConfig
from structgen.snapshot import main, take_snapshot


class TestTakeSnapshot:
    def test_writes_tables_and_views(self, sqlite_url, tmp_path):
        output = tmp_path / "schema.yaml"
        with DatabaseSchemaProvider.connect("app", "secret", sqlite_url, GeneratorConfig()) as provider:
            count = take_snapshot(provider, output)

        assert count == 3
        document = yaml.safe_load(output.read_text())
        assert sorted(t["name"] for t in document["tables"]) == ["orders", "user"]
        assert [v["name"] for v in document["views"]] == ["user_names"]
        user = next(t for t in document["tables"] if t["name"] == "user")
        assert [c["name"] for c in user["columns"]] == ["id", "name"]

    def test_snapshot_reads_back(self, sqlite_url, tmp_path):
        output = tmp_path / "schema.yaml"
        with DatabaseSchemaProvider.connect("app", "secret", sqlite_url, GeneratorConfig()) as provider:
            take_snapshot(provider, output)
            tables = provider.list_tables()
            types = provider.column_types("orders")

        snapshot = SnapshotSchemaProvider(output)
        assert snapshot.list_tables() == tables
        assert snapshot.list_views() == ["user_names"]
        assert snapshot.column_types("orders") == types


class TestMain:
    def test_main(self, sqlite_url, tmp_path, capsys):
        output = tmp_path / "out" / "schema.yaml"

        main(["app", "secret", sqlite_url, "-o", str(output)])

        assert output.is_file()
        assert f"Wrote 3 table(s)/view(s) to {output}" in capsys.readouterr().out

    def test_main_unknown_environment(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit) as exc_info:
            main(["app", "secret", "production"])
        assert "Cannot connect to environment 'production'" in str(exc_info.value)

    def test_main_missing_arguments(self):
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2
