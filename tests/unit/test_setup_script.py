"""Unit tests for the Supabase setup script."""

from scripts.setup_supabase import get_sql, main


class TestGetSql:
    def test_setup_sql_uses_table_name(self):
        sql = get_sql("content_kv")

        assert "CREATE TABLE IF NOT EXISTS content_kv" in sql
        assert "value JSONB NOT NULL" in sql
        assert "text_pattern_ops" in sql

    def test_drop_sql(self):
        assert get_sql("content_kv", "drop").strip() == "DROP TABLE IF EXISTS content_kv;"


class TestMain:
    def test_prints_sql(self, capsys):
        assert main([]) == 0
        assert "CREATE TABLE IF NOT EXISTS kv_store" in capsys.readouterr().out

    def test_writes_output_file(self, tmp_path):
        target = tmp_path / "setup.sql"

        assert main(["--output", str(target), "--table", "kv"]) == 0
        assert "CREATE TABLE IF NOT EXISTS kv" in target.read_text(encoding="utf-8")
