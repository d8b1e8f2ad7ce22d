# tests/test_core/test_document.py
"""Unit tests for the `Document` line buffer.
============================================

Validates:
- The empty document is a single empty line.
- Clamped reads.
- Character insert/delete, line split/merge (content-preserving).
- Loading with encoding detection and saving with an optional trailing newline.
"""

from pathlib import Path

import pytest

from lined.core.Document import Document


class TestDocumentModel:
    """In-memory behaviour of `Document`."""

    def test_empty_document_is_one_empty_line(self) -> None:
        for doc in (Document(), Document([]), Document.from_text("")):
            assert doc.lines() == ("",)
            assert doc.line_count == 1
            assert doc.is_blank()

    @pytest.mark.parametrize(
        "text, lines",
        [
            ("a\nb\n", ("a", "b")),
            ("a\r\nb", ("a", "b")),
            ("a\n\n", ("a", "")),
            ("\n", ("",)),
            ("a b\x85c\x0bd", ("a b\x85c\x0bd",)),
            ("lone\rcr", ("lone\rcr",)),
        ],
    )
    def test_from_text_splits_on_newlines_only(self, text: str, lines: tuple[str, ...]) -> None:
        assert Document.from_text(text).lines() == lines

    def test_reads_clamp_row(self) -> None:
        doc = Document(["ab", "cde"])
        assert doc.line(5) == "cde"
        assert doc.line(-3) == "ab"
        assert doc.line_length(99) == 3
        assert doc.clamp_row(7) == 1

    def test_insert_and_delete_char(self) -> None:
        doc = Document(["abc"])
        doc.insert_char(0, 1, "X")
        assert doc.line(0) == "aXbc"
        doc.insert_char(0, 99, "!")
        assert doc.line(0) == "aXbc!"

        assert doc.delete_char(0, 1) == "X"
        assert doc.delete_char(0, 4) == "!"
        assert doc.delete_char(0, 3) == ""
        assert doc.line(0) == "abc"

    def test_split_and_merge_preserve_content(self) -> None:
        """Splitting then merging back restores the original lines exactly."""
        original = ["hello world", "second"]
        doc = Document(original)
        doc.split_line(0, 5)
        assert doc.lines() == ("hello", " world", "second")
        assert doc.merge_with_next(0) is True
        assert list(doc.lines()) == original

    def test_split_at_line_edges(self) -> None:
        doc = Document(["abc"])
        doc.split_line(0, 0)
        assert doc.lines() == ("", "abc")
        doc.split_line(1, 3)
        assert doc.lines() == ("", "abc", "")

    def test_merge_on_last_row_is_refused(self) -> None:
        doc = Document(["a", "b"])
        assert doc.merge_with_next(1) is False
        assert doc.lines() == ("a", "b")

    def test_serialize(self) -> None:
        assert Document(["a", "b"]).serialize() == "a\nb\n"
        assert Document(["a", "b"]).serialize(trailing_newline=False) == "a\nb"
        assert Document().serialize() == ""


class TestDocumentStorage:
    """Loading and saving through the filesystem."""

    def test_load_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "sample.txt"
        path.write_text("first\nsecond line\n", encoding="utf-8")

        doc, encoding = Document.load(str(path))

        assert doc.lines() == ("first", "second line")
        assert encoding.lower().replace("_", "-") in {"utf-8", "ascii"}

    def test_load_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.txt"
        path.write_bytes(b"")
        doc, encoding = Document.load(str(path))
        assert doc.is_blank()
        assert encoding == "utf-8"

    def test_load_crlf(self, tmp_path: Path) -> None:
        path = tmp_path / "dos.txt"
        path.write_bytes(b"one\r\ntwo\r\n")
        doc, _ = Document.load(str(path))
        assert doc.lines() == ("one", "two")

    def test_load_save_keeps_form_feed_and_separators(self, tmp_path: Path) -> None:
        """Only \\n and \\r\\n break lines; other separators survive a round trip."""
        raw = b"int a;\n\x0c\nint b; /* x\x1cy */\n"
        path = tmp_path / "source.c"
        path.write_bytes(raw)

        doc, encoding = Document.load(str(path))
        assert doc.lines() == ("int a;", "\x0c", "int b; /* x\x1cy */")

        doc.save(str(path), encoding)
        assert path.read_bytes() == raw

    def test_load_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Document.load(str(tmp_path / "nope.txt"))

    def test_save_roundtrip(self, tmp_path: Path) -> None:
        path = tmp_path / "out.txt"
        written = Document(["alpha", "beta"]).save(str(path))
        assert written == len(b"alpha\nbeta\n")
        assert path.read_bytes() == b"alpha\nbeta\n"

        doc, _ = Document.load(str(path))
        assert doc.lines() == ("alpha", "beta")

    def test_save_into_missing_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            Document(["x"]).save(str(tmp_path / "missing" / "out.txt"))
