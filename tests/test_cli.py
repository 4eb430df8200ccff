"""
Tests for the command-line interface.
"""

import json
import xml.etree.ElementTree as ET

import pytest

from bookmark_manager.cli import CLIInterface, format_bookmark, main, render_cards_html
from bookmark_manager.core.data_models import Bookmark
from bookmark_manager.core.storage import FileSlot, deserialize_bookmarks, serialize_bookmarks


@pytest.fixture
def cli_data_dir(tmp_path, sample_bookmarks):
    """Data directory pre-populated with the sample bookmarks."""
    path = tmp_path / "cli-data"
    FileSlot(path).write(serialize_bookmarks(sample_bookmarks))
    return path


@pytest.fixture
def run_cli(cli_data_dir, capsys):
    """Run the CLI against the prepared data directory."""

    def _run(*args):
        exit_code = main(["--data-dir", str(cli_data_dir), *args])
        captured = capsys.readouterr()
        return exit_code, captured.out, captured.err

    return _run


def stored_bookmarks(data_dir):
    return deserialize_bookmarks(FileSlot(data_dir).read())


class TestArgumentParsing:
    """Test argument parsing."""

    def test_command_required(self):
        with pytest.raises(SystemExit):
            CLIInterface().parse_args([])

    def test_add_requires_title_and_url(self):
        with pytest.raises(SystemExit):
            CLIInterface().parse_args(["add", "--title", "x"])

    def test_unknown_export_format(self):
        with pytest.raises(SystemExit):
            CLIInterface().parse_args(["export", "csv"])

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            CLIInterface().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert "bookmark-manager" in capsys.readouterr().out


class TestListCommands:
    """Test list and categories."""

    def test_list_all(self, run_cli):
        code, out, _ = run_cli("list")

        assert code == 0
        assert "[a1] Python Documentation" in out
        assert "dev · docs" in out
        assert "[d4] Uncategorized" in out

    def test_list_filtered(self, run_cli):
        code, out, _ = run_cli("list", "--category", "dev", "--search", "code")

        assert code == 0
        assert "[b2] GitHub" in out
        assert "[a1]" not in out

    def test_list_empty_result(self, run_cli):
        code, out, _ = run_cli("list", "--search", "nothing matches this")
        assert code == 0
        assert "No bookmarks found" in out

    def test_list_html(self, run_cli):
        code, out, _ = run_cli("list", "--html", "--category", "Food")

        assert code == 0
        assert '<div class="card" data-id="c3">' in out
        assert 'href="https://recipes.example.com"' in out

    def test_categories(self, run_cli):
        code, out, _ = run_cli("categories")

        assert code == 0
        assert out.splitlines() == ["All (4)", "Food (1)", "dev (2)", "docs (1)", "tools (1)"]

    def test_empty_data_dir_is_seeded(self, tmp_path, capsys):
        data_dir = tmp_path / "fresh"

        assert main(["--data-dir", str(data_dir), "list"]) == 0

        assert "Google" in capsys.readouterr().out
        assert len(stored_bookmarks(data_dir)) == 3


class TestMutationCommands:
    """Test add, update and remove."""

    def test_add(self, run_cli, cli_data_dir):
        code, out, _ = run_cli(
            "add", "--title", "New", "--url", "https://new.example",
            "--categories", "a, , b", "--desc", " text ",
        )

        assert code == 0
        new = stored_bookmarks(cli_data_dir)[0]
        assert out.strip() == new.id
        assert new.title == "New"
        assert new.categories == ["a", "b"]
        assert new.desc == "text"

    def test_add_blank_title_fails(self, run_cli, cli_data_dir):
        code, _, err = run_cli("add", "--title", " ", "--url", "https://x.example")

        assert code == 1
        assert "Error: Bookmark title is required" in err
        assert len(stored_bookmarks(cli_data_dir)) == 4

    def test_update(self, run_cli, cli_data_dir):
        code, out, _ = run_cli("update", "b2", "--title", "GitHub Inc")

        assert code == 0
        assert "Updated b2" in out
        updated = stored_bookmarks(cli_data_dir)[1]
        assert updated.title == "GitHub Inc"
        assert updated.categories == ["dev", "tools"]

    def test_update_unknown_id(self, run_cli):
        code, out, _ = run_cli("update", "missing", "--title", "x")
        assert code == 0
        assert "nothing changed" in out

    def test_remove(self, run_cli, cli_data_dir):
        code, out, _ = run_cli("remove", "a1")

        assert code == 0
        assert "Removed a1" in out
        assert [b.id for b in stored_bookmarks(cli_data_dir)] == ["b2", "c3", "d4"]

    def test_remove_unknown_id(self, run_cli, cli_data_dir):
        code, out, _ = run_cli("remove", "missing")
        assert code == 0
        assert "nothing changed" in out
        assert len(stored_bookmarks(cli_data_dir)) == 4


class TestExportImportCommands:
    """Test export and import."""

    def test_export_json_to_stdout(self, run_cli, sample_bookmarks):
        code, out, _ = run_cli("export", "json")

        assert code == 0
        assert json.loads(out) == [b.to_dict() for b in sample_bookmarks]

    def test_export_opml_to_file(self, run_cli, tmp_path):
        target = tmp_path / "out" / "bookmarks.opml"
        code, out, _ = run_cli("export", "opml", "-o", str(target))

        assert code == 0
        assert "Exported 4 bookmarks" in out
        root = ET.fromstring(target.read_bytes())
        assert len(root.find("body/outline")) == 4

    def test_import(self, run_cli, tmp_path, cli_data_dir):
        source = tmp_path / "import.json"
        source.write_text(
            json.dumps(
                [
                    {"name": "Dup", "xmlUrl": "https://github.com"},
                    {"name": "Fresh", "xmlUrl": "https://fresh.example", "tags": "x, y"},
                ]
            ),
            encoding="utf-8",
        )

        code, out, _ = run_cli("import", str(source))

        assert code == 0
        assert "Imported 1 new bookmark(s); 1 skipped" in out
        first = stored_bookmarks(cli_data_dir)[0]
        assert first.title == "Fresh"
        assert first.categories == ["x", "y"]

    def test_import_invalid_document(self, run_cli, tmp_path, cli_data_dir):
        source = tmp_path / "bad.json"
        source.write_text("{}", encoding="utf-8")

        code, _, err = run_cli("import", str(source))

        assert code == 1
        assert "Import failed" in err
        assert len(stored_bookmarks(cli_data_dir)) == 4

    def test_import_too_deeply_nested(self, run_cli, tmp_path, cli_data_dir):
        source = tmp_path / "nested.json"
        source.write_text("[" * 200000 + "]" * 200000, encoding="utf-8")

        code, _, err = run_cli("import", str(source))

        assert code == 1
        assert "Import failed" in err
        assert len(stored_bookmarks(cli_data_dir)) == 4

    def test_corrupt_store_still_lists_defaults(self, tmp_path, capsys):
        data_dir = tmp_path / "corrupt"
        FileSlot(data_dir).write("[" * 200000 + "]" * 200000)

        assert main(["--data-dir", str(data_dir), "list"]) == 0
        assert "Google" in capsys.readouterr().out

    def test_import_missing_file(self, run_cli, tmp_path):
        code, _, err = run_cli("import", str(tmp_path / "missing.json"))
        assert code == 1
        assert "does not exist" in err


class TestConfigCommands:
    """Test configuration handling."""

    def test_create_config(self, tmp_path, capsys):
        target = tmp_path / "generated.toml"

        assert main(["create-config", "-o", str(target)]) == 0
        assert target.exists()
        assert "Created configuration file" in capsys.readouterr().out

    def test_create_config_leaves_store_alone(self, tmp_path, monkeypatch):
        data_dir = tmp_path / "untouched"
        monkeypatch.setenv("BOOKMARK_MANAGER_DATA_DIR", str(data_dir))

        assert main(["create-config", "-o", str(tmp_path / "sample.toml")]) == 0
        assert not data_dir.exists()

    def test_create_config_refuses_overwrite(self, tmp_path, capsys):
        target = tmp_path / "existing.json"
        target.write_text("{}")

        assert main(["create-config", "--format", "json", "-o", str(target)]) == 1
        assert target.read_text() == "{}"

    def test_missing_config_file(self, run_cli, tmp_path):
        code, _, err = run_cli("--config", str(tmp_path / "nope.toml"), "list")
        assert code == 1
        assert "Configuration file does not exist" in err

    def test_config_file_sets_slot_key(self, tmp_path, capsys):
        config_path = tmp_path / "custom.toml"
        config_path.write_text(
            f'[storage]\ndata_dir = "{(tmp_path / "cfg").as_posix()}"\nslot_key = "alt"\n'
        )

        assert main(["--config", str(config_path), "add", "-t", "T", "-u", "https://t"]) == 0
        assert (tmp_path / "cfg" / "alt.json").exists()


class TestRendering:
    """Test output helpers."""

    def test_format_bookmark_uses_favicon_fallback(self):
        text = format_bookmark(Bookmark(id="x", title="T", url="https://github.com"))
        assert "icon: https://www.google.com/s2/favicons?domain=github.com" in text

    def test_cards_escape_values(self):
        bookmark = Bookmark(
            id="x",
            title="<script>alert(1)</script>",
            url="https://x.example/?a=1&b=2",
            desc="Tom & Jerry's",
            categories=["a<b"],
        )
        html = render_cards_html([bookmark])

        assert "<script>" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
        assert 'href="https://x.example/?a=1&amp;b=2"' in html
        assert "Tom &amp; Jerry&#39;s" in html
        assert "a&lt;b" in html

    def test_cards_empty(self):
        assert 'class="empty"' in render_cards_html([])
