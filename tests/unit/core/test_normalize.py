"""Unit tests for import-annotation stripping."""

from pathlib import Path

import pytest

from vendortrace.core.normalize import (
    remove_import_comment,
    strip_import_comment,
    strip_import_comment_bytes,
)
from vendortrace.domain.exceptions import FileAccessError


class TestRemoveImportComment:
    """Tests for single-line rewriting."""

    def test_line_comment(self):
        """Test that a trailing line-comment annotation is dropped."""
        assert remove_import_comment(b'package foo // import "example.com/foo"') == b"package foo"

    def test_block_comment_with_trailing_text(self):
        """Test that text after a block-comment annotation is kept."""
        line = b'package foo /* import "example.com/foo" */ // trailing'
        assert remove_import_comment(line) == b"package foo // trailing"

    def test_backtick_quoted_path(self):
        """Test that backtick-quoted paths are recognized."""
        assert remove_import_comment(b"package foo // import `example.com/foo`") == b"package foo"

    def test_extra_whitespace(self):
        """Test that whitespace around the annotation is tolerated."""
        line = b'package   foo   //   import   "example.com/foo"   '
        assert remove_import_comment(line) == b"package   foo"

    @pytest.mark.parametrize(
        "line",
        [
            b"package foo",
            b"package foo // a normal comment",
            b'package foo // import "a" and more',
            b'import "example.com/foo"',
            b'var x = 1 // import "example.com/foo"',
            b'package foo // import ""',
        ],
    )
    def test_non_matching_lines(self, line: bytes):
        """Test that lines without an exact annotation are left alone."""
        assert remove_import_comment(line) is None


class TestStripImportCommentBytes:
    """Tests for whole-content normalization."""

    def test_strips_annotation(self):
        """Test that the package clause is rewritten and the change reported."""
        result = strip_import_comment_bytes(b'package foo // import "example.com/foo"\n\nfunc A() {}\n')
        assert result.changed
        assert result.content == b"package foo\n\nfunc A() {}\n"

    def test_unchanged_file(self):
        """Test that a file without annotation is reported unchanged."""
        data = b"package foo\n\nfunc A() {}\n"
        result = strip_import_comment_bytes(data)
        assert not result.changed
        assert result.content == data

    def test_missing_final_newline_counts_as_change(self):
        """Test that a missing trailing newline is added and reported."""
        result = strip_import_comment_bytes(b"package foo\n\nfunc A() {}")
        assert result.changed
        assert result.content == b"package foo\n\nfunc A() {}\n"

    def test_empty_content(self):
        """Test that empty content stays empty and unchanged."""
        result = strip_import_comment_bytes(b"")
        assert not result.changed
        assert result.content == b""

    def test_annotated_and_plain_files_normalize_equal(self):
        """Test that files differing only by annotation become identical."""
        annotated = strip_import_comment_bytes(b'package foo /* import "x.org/foo" */\nvar A = 1\n')
        plain = strip_import_comment_bytes(b"package foo\nvar A = 1\n")
        assert annotated.content == plain.content


class TestStripImportCommentFile:
    """Tests for file-based normalization."""

    def test_go_file(self, tmp_path: Path):
        """Test that recognized source files are normalized."""
        source = tmp_path / "foo.go"
        source.write_bytes(b'package foo // import "example.com/foo"\n')
        result = strip_import_comment(source)
        assert result.changed
        assert result.content == b"package foo\n"

    def test_other_extension_untouched(self, tmp_path: Path):
        """Test that unrecognized files are returned verbatim."""
        source = tmp_path / "notes.txt"
        source.write_bytes(b'package foo // import "example.com/foo"')
        result = strip_import_comment(source)
        assert not result.changed
        assert result.content == b'package foo // import "example.com/foo"'

    def test_custom_extensions(self, tmp_path: Path):
        """Test that the recognized extension set is configurable."""
        source = tmp_path / "foo.gotmpl"
        source.write_bytes(b'package foo // import "example.com/foo"\n')
        assert strip_import_comment(source, extensions=[".gotmpl"]).changed

    def test_missing_file(self, tmp_path: Path):
        """Test that read failures are wrapped with context."""
        with pytest.raises(FileAccessError, match="strip_import_comment"):
            strip_import_comment(tmp_path / "missing.go")
