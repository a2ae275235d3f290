"""Tests for vault path resolution and sandboxing."""

from pathlib import Path

import pytest

from docvault.core.errors import InvalidVaultPathError, PathTraversalError
from docvault.vault.layout import (
    ATTACHMENTS_DIR,
    PathResolver,
    ensure_vault_structure,
    normalize,
    split_segments,
)


@pytest.fixture
def resolver(base_dir):
    """PathResolver over the temporary base directory."""
    return PathResolver(base_dir)


class TestVaultRoot:
    """Tests for vault root lookup."""

    def test_vault_root_is_id_folder(self, resolver, base_dir):
        """Vault root is <base>/<id>."""
        assert resolver.vault_root(3) == base_dir / "3"

    def test_attachments_path(self, resolver, base_dir):
        """Attachments live in the reserved hidden folder."""
        assert resolver.attachments_path(3) == base_dir / "3" / ".attachments"

    @pytest.mark.parametrize("bad_id", ["3", 3.0, True, None])
    def test_vault_id_must_be_int(self, resolver, bad_id):
        """Non-integer vault ids are rejected."""
        with pytest.raises(TypeError):
            resolver.vault_root(bad_id)

    def test_ensure_vault_structure_is_idempotent(self, resolver):
        """Root and attachments folder are created and survive repeat calls."""
        root = ensure_vault_structure(resolver, 5)
        ensure_vault_structure(resolver, 5)

        assert root.is_dir()
        assert (root / ATTACHMENTS_DIR).is_dir()


class TestResolve:
    """Tests for PathResolver.resolve."""

    @pytest.mark.parametrize(
        "path",
        ["notes/today.md", "a", "deep/er/path/file.txt", ".attachments/img.png"],
    )
    def test_leading_slash_is_ignored(self, resolver, path):
        """Leading slashes never change the result."""
        assert resolver.resolve(1, path) == resolver.resolve(1, "/" + path)
        assert resolver.resolve(1, path) == resolver.resolve(1, "///" + path)

    @pytest.mark.parametrize("path", ["", "/", "//", ".", "/./"])
    def test_root_forms_resolve_to_root(self, resolver, path):
        """Empty and slash-only paths are the vault root."""
        assert resolver.resolve(1, path) == resolver.vault_root(1)

    def test_joins_segments(self, resolver, base_dir):
        """Segments are joined onto the vault root."""
        assert resolver.resolve(1, "/notes/2024/today.md") == (
            base_dir / "1" / "notes" / "2024" / "today.md"
        )

    def test_dot_and_empty_segments_dropped(self, resolver):
        """'.' and repeated slashes collapse."""
        assert resolver.resolve(1, "./a//./b/") == resolver.resolve(1, "a/b")

    def test_backslashes_are_separators(self, resolver):
        """Windows-style separators are translated."""
        assert resolver.resolve(1, "a\\b.md") == resolver.resolve(1, "a/b.md")

    @pytest.mark.parametrize(
        "path",
        [
            "..",
            "../other",
            "/../1/file.md",
            "a/../../escape",
            "a/..",
            "a/../b",
            "..\\..\\etc\\passwd",
        ],
    )
    def test_parent_segments_rejected(self, resolver, path):
        """Any '..' segment is a traversal error."""
        with pytest.raises(PathTraversalError):
            resolver.resolve(1, path)

    @pytest.mark.parametrize(
        "path", ["a", "/x/y/z", "..hidden", "a..b/c", ".attachments"]
    )
    def test_result_stays_under_root(self, resolver, path):
        """Accepted paths resolve at or below the vault root."""
        assert resolver.resolve(1, path).is_relative_to(resolver.vault_root(1))

    def test_resolve_is_idempotent(self, resolver, base_dir):
        """Filesystem state does not change the resolved path."""
        before = resolver.resolve(1, "/notes/a.md")
        before.parent.mkdir(parents=True)
        before.write_text("x")

        assert resolver.resolve(1, "/notes/a.md") == before

    def test_symlink_escaping_vault_rejected(
        self, resolver, outside_dir, require_symlinks
    ):
        """A symlink inside the vault cannot be used to reach outside it."""
        root = ensure_vault_structure(resolver, 1)
        (outside_dir / "secret.txt").write_text("secret")
        (root / "link").symlink_to(outside_dir, target_is_directory=True)

        with pytest.raises(PathTraversalError):
            resolver.resolve(1, "/link/secret.txt")

    @pytest.mark.parametrize("path", ["a\x00b.md", "/dir/\x00", "\x00"])
    def test_nul_character_rejected(self, resolver, path):
        """NUL characters are a structured error, not a ValueError."""
        with pytest.raises(InvalidVaultPathError):
            resolver.resolve(1, path)

    def test_traversal_error_carries_path(self, resolver):
        """The error names the offending path."""
        with pytest.raises(PathTraversalError) as exc_info:
            resolver.resolve(1, "../x")

        assert exc_info.value.path == "../x"
        assert "../x" in str(exc_info.value)


class TestVaultPaths:
    """Tests for vault path rendering helpers."""

    def test_to_vault_path(self, resolver):
        """Absolute paths render as slash-rooted vault paths."""
        absolute = resolver.vault_root(1) / "notes" / "a.md"

        assert resolver.to_vault_path(1, absolute) == "/notes/a.md"

    def test_to_vault_path_root(self, resolver):
        """The root renders as '/'."""
        assert resolver.to_vault_path(1, resolver.vault_root(1)) == "/"

    def test_to_vault_path_outside_rejected(self, resolver, tmp_path):
        """Paths outside the vault cannot be rendered."""
        with pytest.raises(PathTraversalError):
            resolver.to_vault_path(1, tmp_path / "elsewhere")

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("", "/"),
            ("/", "/"),
            ("a/b", "/a/b"),
            ("//a//b/", "/a/b"),
            ("./a/./b", "/a/b"),
        ],
    )
    def test_normalize(self, path, expected):
        """normalize gives the canonical form used for equality."""
        assert normalize(path) == expected

    def test_split_segments(self):
        """split_segments returns plain names."""
        assert split_segments("/a\\b/./c/") == ["a", "b", "c"]

    def test_resolver_expands_user(self):
        """Base directory supports '~'."""
        resolver = PathResolver("~/vaults")

        assert resolver.base_dir == Path("~/vaults").expanduser().absolute()
