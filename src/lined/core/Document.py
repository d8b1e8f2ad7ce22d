# lined/core/Document.py
"""lined.core.Document
======================

The line buffer: an ordered list of text lines.

An empty document is a single empty line, never an empty list, so there is
always a valid row for the cursor to sit on. Every read clamps the requested
row into ``[0, line_count - 1]``; splits and merges preserve the total
character content exactly.

Loading detects the file encoding with `chardet` and falls back through
UTF-8 and Latin-1 before decoding with replacement characters.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, Optional, Sequence

import chardet

logger = logging.getLogger("lined")

CHARDET_SAMPLE_SIZE = 1024 * 20
CHARDET_MIN_CONFIDENCE = 0.75
DEFAULT_ENCODING = "utf-8"


class Document:
    """Ordered sequence of text lines.

    Attributes:
        _lines (list[str]): Backing storage; never empty.
    """

    def __init__(self, lines: Optional[Iterable[str]] = None) -> None:
        self._lines: list[str] = list(lines) if lines is not None else []
        if not self._lines:
            self._lines = [""]

    @classmethod
    def from_text(cls, text: str) -> "Document":
        """Split ``text`` on ``\\n`` and ``\\r\\n`` only.

        Other characters `str.splitlines` treats as breaks (form feed,
        ``\\x1c``, ``\\u2028``...) stay inside their line so a load/save
        round trip keeps them.
        """
        lines = text.split("\n")
        if len(lines) > 1 and lines[-1] == "":
            lines.pop()
        return cls(line[:-1] if line.endswith("\r") else line for line in lines)

    def __repr__(self) -> str:
        return f"Document(line_count={self.line_count})"

    def __len__(self) -> int:
        return len(self._lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self._lines == other._lines

    # --- queries ---
    @property
    def line_count(self) -> int:
        return len(self._lines)

    @property
    def last_row(self) -> int:
        return len(self._lines) - 1

    def clamp_row(self, row: int) -> int:
        return min(max(row, 0), self.last_row)

    def line(self, row: int) -> str:
        """Return the line at ``row``, clamped to the last line."""
        return self._lines[self.clamp_row(row)]

    def line_length(self, row: int) -> int:
        return len(self.line(row))

    def lines(self) -> Sequence[str]:
        """Snapshot of the current lines."""
        return tuple(self._lines)

    def is_blank(self) -> bool:
        """True for the canonical empty document (one empty line)."""
        return self._lines == [""]

    def text(self) -> str:
        return "\n".join(self._lines)

    # --- mutations ---
    def insert_char(self, row: int, col: int, ch: str) -> None:
        row = self.clamp_row(row)
        line = self._lines[row]
        col = min(max(col, 0), len(line))
        self._lines[row] = line[:col] + ch + line[col:]

    def delete_char(self, row: int, col: int) -> str:
        """Remove and return the character at ``(row, col)``; "" if none."""
        row = self.clamp_row(row)
        line = self._lines[row]
        if not 0 <= col < len(line):
            return ""
        self._lines[row] = line[:col] + line[col + 1 :]
        return line[col]

    def split_line(self, row: int, col: int) -> None:
        """Split ``row`` at ``col``; the suffix becomes a new line below."""
        row = self.clamp_row(row)
        line = self._lines[row]
        col = min(max(col, 0), len(line))
        self._lines[row] = line[:col]
        self._lines.insert(row + 1, line[col:])

    def merge_with_next(self, row: int) -> bool:
        """Append line ``row + 1`` to ``row`` and drop it. False on the last row."""
        row = self.clamp_row(row)
        if row >= self.last_row:
            return False
        self._lines[row] += self._lines.pop(row + 1)
        return True

    # --- storage ---
    @classmethod
    def load(cls, path: str) -> tuple["Document", str]:
        """Read ``path`` and return ``(document, encoding)``.

        Raises:
            OSError: the file is missing, unreadable or a directory.
        """
        with open(path, "rb") as f_binary:
            raw = f_binary.read()

        if not raw:
            logger.info("File '%s' is empty.", path)
            return cls(), DEFAULT_ENCODING

        sample = raw[:CHARDET_SAMPLE_SIZE]
        detected = chardet.detect(sample)
        guess = detected.get("encoding")
        confidence = detected.get("confidence") or 0.0
        logger.debug(
            "Chardet detected encoding '%s' with confidence %.2f for '%s'.",
            guess, confidence, path,
        )

        attempts: list[tuple[str, str]] = []
        if guess and confidence >= CHARDET_MIN_CONFIDENCE:
            attempts.append((guess, "strict"))
        for candidate in (("utf-8", "strict"), ("latin-1", "strict")):
            if candidate not in attempts:
                attempts.append(candidate)

        for encoding, errors in attempts:
            try:
                text = raw.decode(encoding, errors=errors)
            except (UnicodeDecodeError, LookupError) as e_decode:
                logger.debug("Decoding '%s' as %s failed: %s", path, encoding, e_decode)
                continue
            logger.info("Read '%s' using encoding '%s'.", path, encoding)
            return cls.from_text(text), encoding

        # latin-1 decodes any byte sequence, so this is only reached for odd codecs
        logger.warning("Falling back to utf-8 with replacement for '%s'.", path)
        return cls.from_text(raw.decode(DEFAULT_ENCODING, errors="replace")), DEFAULT_ENCODING

    def serialize(self, trailing_newline: bool = True) -> str:
        if self.is_blank():
            return ""
        content = "\n".join(self._lines)
        return content + "\n" if trailing_newline else content

    def save(self, path: str, encoding: str = DEFAULT_ENCODING, trailing_newline: bool = True) -> int:
        """Write the document to ``path`` and return the number of bytes written.

        Raises:
            OSError: the file could not be written.
        """
        data = self.serialize(trailing_newline).encode(encoding, errors="replace")
        parent = os.path.dirname(path)
        if parent and not os.path.isdir(parent):
            raise FileNotFoundError(f"Directory does not exist: '{parent}'")
        with open(path, "wb") as f_out:
            f_out.write(data)
        logger.info("Wrote %d bytes to '%s' (encoding %s).", len(data), path, encoding)
        return len(data)
