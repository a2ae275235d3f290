"""Tests for the DocVault CLI."""

import pytest
from typer.testing import CliRunner

from docvault.interfaces.cli.app import app

runner = CliRunner()


@pytest.fixture
def invoke(base_dir):
    """Invoke the CLI against the temporary base directory."""

    def _invoke(*args, input=None):
        return runner.invoke(app, ["--base-dir", str(base_dir), *args], input=input)

    return _invoke


class TestCliVaultCommands:
    """Tests for init, tree and where."""

    def test_init(self, invoke, base_dir):
        """init creates the vault folder."""
        result = invoke("init", "3")

        assert result.exit_code == 0
        assert (base_dir / "3" / ".attachments").is_dir()

    def test_tree_of_missing_vault(self, invoke):
        """An uninitialized vault prints an empty notice."""
        result = invoke("tree", "3")

        assert result.exit_code == 0
        assert "Vault is empty." in result.output

    def test_tree_lists_entries(self, invoke):
        """Files and folders appear in the tree."""
        invoke("write", "3", "/notes/today.md", "--content", "# Today")

        result = invoke("tree", "3")

        assert result.exit_code == 0
        assert "notes/" in result.output
        assert "today.md" in result.output
        assert ".attachments/" in result.output

    def test_where_prints_absolute_path(self, invoke, base_dir):
        """where prints the resolved on-disk path."""
        result = invoke("where", "3", "/a/b.md")

        assert result.exit_code == 0
        assert result.output.strip() == str(base_dir / "3" / "a" / "b.md")

    def test_invalid_vault_id(self, invoke):
        """Vault ids must be integers."""
        result = invoke("tree", "abc")

        assert result.exit_code != 0


class TestCliFileCommands:
    """Tests for file-level commands."""

    def test_write_and_cat(self, invoke):
        """Content written from stdin prints back unchanged."""
        write = invoke("write", "3", "/a.md", input="line one\nline two\n")
        cat = invoke("cat", "3", "/a.md")

        assert write.exit_code == 0
        assert cat.exit_code == 0
        assert cat.output == "line one\nline two\n"

    def test_cat_missing_file(self, invoke):
        """Errors print a message and exit with status 1."""
        result = invoke("cat", "3", "/missing.md")

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_traversal_refused(self, invoke, tmp_path):
        """Paths escaping the vault fail without touching the disk."""
        result = invoke("write", "3", "../../escape.md", "--content", "x")

        assert result.exit_code == 1
        assert not (tmp_path / "escape.md").exists()

    def test_mkdir_and_rm(self, invoke, base_dir):
        """Folders can be created and deleted."""
        assert invoke("mkdir", "3", "/a/b").exit_code == 0
        assert (base_dir / "3" / "a" / "b").is_dir()

        assert invoke("rm", "3", "/a").exit_code == 0
        assert not (base_dir / "3" / "a").exists()

    def test_import(self, invoke, base_dir, outside_dir):
        """import copies an external file into the target folder."""
        source = outside_dir / "paper.pdf"
        source.write_bytes(b"%PDF")

        result = invoke("import", "3", str(source), "--to", "/papers")

        assert result.exit_code == 0
        assert (base_dir / "3" / "papers" / "paper.pdf").read_bytes() == b"%PDF"

    def test_info(self, invoke):
        """info shows the document title and type."""
        invoke("write", "3", "/Plan.md", "--content", "x")

        result = invoke("info", "3", "/Plan.md")

        assert result.exit_code == 0
        assert "Plan" in result.output
        assert "markdown" in result.output

    def test_rename(self, invoke, base_dir):
        """rename moves the entry to its new path."""
        invoke("write", "3", "/a.md", "--content", "x")

        result = invoke("rename", "3", "/a.md", "/b.md")

        assert result.exit_code == 0
        assert (base_dir / "3" / "b.md").exists()

    def test_cp_dedups(self, invoke, base_dir):
        """cp into the same folder picks a copy name."""
        invoke("write", "3", "/a.md", "--content", "x")

        result = invoke("cp", "3", "/a.md")

        assert result.exit_code == 0
        assert (base_dir / "3" / "a copy.md").exists()

    def test_mv_conflict(self, invoke, base_dir):
        """mv refuses to overwrite an existing entry."""
        invoke("write", "3", "/a.md", "--content", "mine")
        invoke("write", "3", "/dir/a.md", "--content", "theirs")

        result = invoke("mv", "3", "/a.md", "/dir")

        assert result.exit_code == 1
        assert (base_dir / "3" / "a.md").read_text() == "mine"
        assert (base_dir / "3" / "dir" / "a.md").read_text() == "theirs"

    def test_attach(self, invoke, base_dir, outside_dir):
        """attach stores a file under .attachments."""
        source = outside_dir / "shot.png"
        source.write_bytes(b"\x89PNG")

        result = invoke("attach", "3", str(source), "--name", "paste.png")

        assert result.exit_code == 0
        assert (base_dir / "3" / ".attachments" / "paste.png").read_bytes() == b"\x89PNG"

    def test_attach_unreadable_source(self, invoke, outside_dir):
        """A missing source file is reported."""
        result = invoke("attach", "3", str(outside_dir / "nope.png"))

        assert result.exit_code == 1
