"""Byte cursor with one-step push-back used by the canonicalizing scanners."""

from __future__ import annotations

from typing import Final

# Lead byte upper bounds and the UTF-8 sequence length they introduce
_ASCII_LIMIT: Final = 0x7F
_TWO_BYTE_LEAD: Final = range(0xC2, 0xE0)
_THREE_BYTE_LEAD: Final = range(0xE0, 0xF0)
_FOUR_BYTE_LEAD: Final = range(0xF0, 0xF5)


def _sequence_length(lead: int) -> int:
    """Returns the UTF-8 length a lead byte announces, 1 if invalid."""
    if lead <= _ASCII_LIMIT:
        return 1
    if lead in _TWO_BYTE_LEAD:
        return 2
    if lead in _THREE_BYTE_LEAD:
        return 3
    if lead in _FOUR_BYTE_LEAD:
        return 4
    return 1


class ByteCursor:
    """Forward-only reader over an in-memory byte sequence.

    Reads hand out raw input bytes; end of input is reported as ``None``
    rather than raised, so callers decide whether running out is an error.
    Exactly one read can be undone with :meth:`unread`.
    """

    def __init__(self, data: bytes | bytearray | memoryview) -> None:
        """Initialize cursor at the start of the input.

        Args:
            data: The complete input document
        """
        self.data: Final = bytes(data)
        self.length: Final = len(self.data)
        self._pos = 0
        self._last_size = 0

    @property
    def pos(self) -> int:
        """Offset of the next unread byte."""
        return self._pos

    @property
    def at_end(self) -> bool:
        return self._pos >= self.length

    def remaining(self) -> bytes:
        """Returns the bytes not consumed yet."""
        return self.data[self._pos :]

    def read_byte(self) -> bytes | None:
        """Returns the next byte as a one-byte ``bytes`` or None at end."""
        if self._pos >= self.length:
            self._last_size = 0
            return None
        self._last_size = 1
        self._pos += 1
        return self.data[self._pos - 1 : self._pos]

    def read_rune(self) -> tuple[bytes, int] | None:
        """Returns the next UTF-8 character as raw bytes with its byte length.

        A byte that does not begin a well-formed sequence is returned on its
        own with length 1, untouched.

        Returns:
            Tuple of (raw_bytes, size), or None at end of input
        """
        if self._pos >= self.length:
            self._last_size = 0
            return None

        start = self._pos
        size = _sequence_length(self.data[start])
        if size > 1:
            chunk = self.data[start : start + size]
            try:
                chunk.decode("utf-8")
            except UnicodeDecodeError:
                size = 1

        self._pos = start + size
        self._last_size = size
        return self.data[start : self._pos], size

    def unread(self) -> None:
        """Pushes back the most recent read. Not chainable."""
        if self._last_size == 0:
            raise RuntimeError("unread without a preceding read")
        self._pos -= self._last_size
        self._last_size = 0
