"""
Canonical byte form for JSON documents.

Rewrites a JSON document with object keys sorted and insignificant whitespace
removed while carrying scalar token text through verbatim, so documents that
differ only in key order or formatting become byte-for-byte identical.
"""

import hashlib
import logging
import os
import time
from dataclasses import dataclass
from enum import Enum
from operator import itemgetter
from typing import IO
from typing import Any
from typing import TypeAlias

from jnorm._cursor import ByteCursor

__version__ = "0.1.0"

logger = logging.getLogger(__name__)

# Type aliases for domain concepts
TokenSpan: TypeAlias = bytes
ObjectItem: TypeAlias = tuple[bytes, bytes]
Source: TypeAlias = bytes | bytearray | memoryview

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "JNORM_PROFILE" in os.environ

_FILLERS = b" \t\n\r"
_NUMBER_TERMINATORS = b",]} "
_RFC8259_NUMBER_TERMINATORS = b",]}" + _FILLERS


@dataclass
class HotPathStats:
    """Statistics for profiling hot paths during scanning."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    bytes_processed: int = 0

    def record_call(self, duration_ns: int, byte_count: int = 0) -> None:
        """Records a scanner call with timing and byte count."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.bytes_processed += byte_count


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """Context manager for profiling hot paths."""

        def __init__(self, func_name: str, byte_count: int = 0):
            self.func_name = func_name
            self.byte_count = byte_count
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            if self.func_name not in _hot_path_stats:
                _hot_path_stats[self.func_name] = HotPathStats(self.func_name)
            _hot_path_stats[self.func_name].record_call(
                duration, self.byte_count
            )

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns current profiling statistics."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        """Clears profiling statistics."""
        _hot_path_stats.clear()

else:

    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, func_name: str, byte_count: int = 0) -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass


class NormalizeError(ValueError):
    """Base class for every failure to normalize a document."""


class JSONSyntaxError(NormalizeError):
    """
    Signals any structural violation in the input.

    Wrong delimiter, unexpected byte, second decimal point, mismatched
    literal, missing colon or missing quote. Carries no position.
    """


class UnexpectedEndOfInput(NormalizeError, EOFError):
    """Signals that the input ran out while a token was still incomplete."""


class Grammar(Enum):
    """
    Accepted JSON grammar.

    RESTRICTED numbers are unsigned digit runs with at most one '.', and
    every array or object needs at least one element. RFC8259 adds signs,
    exponents, empty containers and surrounding whitespace.
    """

    RESTRICTED = "restricted"
    RFC8259 = "rfc8259"


class DuplicateKeys(Enum):
    """Handling of repeated names inside one object."""

    KEEP = "keep"
    LAST_WINS = "last_wins"
    REJECT = "reject"


@dataclass(frozen=True)
class NormalizeConfig:
    """
    Configures normalization behavior with immutable settings.

    Shared by every scanner of one normalize call; the defaults reproduce
    the plain canonicalization behavior.
    """

    grammar: Grammar = Grammar.RESTRICTED
    duplicate_keys: DuplicateKeys = DuplicateKeys.KEEP
    reject_trailing_data: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.grammar, Grammar):
            raise TypeError("grammar must be a Grammar member")
        if not isinstance(self.duplicate_keys, DuplicateKeys):
            raise TypeError("duplicate_keys must be a DuplicateKeys member")
        if not isinstance(self.reject_trailing_data, bool):
            raise TypeError("reject_trailing_data must be a boolean")


DEFAULT_CONFIG = NormalizeConfig()


def _require_byte(cursor: ByteCursor) -> bytes:
    """Reads one byte, raising UnexpectedEndOfInput when none is left."""
    c = cursor.read_byte()
    if c is None:
        raise UnexpectedEndOfInput("Unexpected end of input")
    return c


def _consume_if(cursor: ByteCursor, expected: bytes) -> bool:
    """Skips fillers and consumes ``expected`` if it is the next byte."""
    skip_fillers(cursor)
    c = cursor.read_byte()
    if c == expected:
        return True
    if c is not None:
        cursor.unread()
    return False


def skip_fillers(cursor: ByteCursor) -> None:
    """Skips JSON whitespace; end of input is not an error here."""
    with ProfileContext("skip_fillers"):
        while True:
            c = cursor.read_byte()
            if c is None:
                return
            if c not in _FILLERS:
                cursor.unread()
                return


def parse_value(
    cursor: ByteCursor, config: NormalizeConfig = DEFAULT_CONFIG
) -> TokenSpan:
    """
    Scans any JSON value starting exactly at the cursor.

    Consumes the opening delimiter of objects, arrays and strings before
    delegating, so those scanners only see what follows it.
    """
    with ProfileContext("parse_value"):
        c = _require_byte(cursor)

        if c == b"{":
            return parse_object(cursor, config)
        elif c == b"[":
            return parse_array(cursor, config)
        elif c == b'"':
            return parse_string(cursor)
        elif c == b"n":
            return parse_null(cursor)
        elif c == b"t" or c == b"f":
            return parse_bool(c, cursor)
        elif c.isdigit() or (
            c == b"-" and config.grammar is Grammar.RFC8259
        ):
            cursor.unread()
            return parse_number(cursor, config)
        else:
            raise JSONSyntaxError("Expecting value")


def parse_string(cursor: ByteCursor) -> TokenSpan:
    """
    Scans a string body whose opening quote was already consumed.

    Returns the full token, both quotes included, with every byte between
    them copied as read. Escapes are tracked only to find the closing quote.
    """
    with ProfileContext("parse_string"):
        buf = bytearray(b'"')
        escaping = False

        while True:
            rune = cursor.read_rune()
            if rune is None:
                raise UnexpectedEndOfInput("Unterminated string")

            ch, _size = rune
            buf += ch

            if ch == b"\\":
                escaping = not escaping
            else:
                if ch == b'"' and not escaping:
                    return bytes(buf)
                escaping = False


def parse_number(
    cursor: ByteCursor, config: NormalizeConfig = DEFAULT_CONFIG
) -> TokenSpan:
    """Scans a number token and returns its source text unchanged."""
    with ProfileContext("parse_number"):
        if config.grammar is Grammar.RFC8259:
            return _parse_rfc8259_number(cursor)

        buf = bytearray()
        seen_point = False

        while True:
            c = cursor.read_byte()
            if c is None:
                if buf:
                    return bytes(buf)
                raise UnexpectedEndOfInput("Unterminated number")

            if c.isdigit():
                buf += c
            elif c == b"." and not seen_point:
                buf += c
                seen_point = True
            elif c in _NUMBER_TERMINATORS:
                cursor.unread()
                return bytes(buf)
            else:
                raise JSONSyntaxError("Invalid number")


def _take_digits(cursor: ByteCursor, buf: bytearray) -> None:
    """Appends the run of ASCII digits at the cursor to ``buf``."""
    while True:
        c = cursor.read_byte()
        if c is None:
            return
        if not c.isdigit():
            cursor.unread()
            return
        buf += c


def _expect_digits(cursor: ByteCursor, buf: bytearray) -> None:
    """Like _take_digits but requires at least one digit."""
    c = _require_byte(cursor)
    if not c.isdigit():
        raise JSONSyntaxError("Invalid number")
    buf += c
    _take_digits(cursor, buf)


def _scan_integer_part(cursor: ByteCursor, buf: bytearray) -> None:
    """Scans the optional sign and integer part of an RFC 8259 number."""
    c = _require_byte(cursor)
    if c == b"-":
        buf += c
        c = _require_byte(cursor)

    if c == b"0":
        buf += c
    elif c.isdigit():
        buf += c
        _take_digits(cursor, buf)
    else:
        raise JSONSyntaxError("Invalid number")


def _scan_decimal_part(cursor: ByteCursor, buf: bytearray) -> None:
    """Scans the fraction of an RFC 8259 number if present."""
    c = cursor.read_byte()
    if c == b".":
        buf += c
        _expect_digits(cursor, buf)
    elif c is not None:
        cursor.unread()


def _scan_exponent_part(cursor: ByteCursor, buf: bytearray) -> None:
    """Scans the exponent of an RFC 8259 number if present."""
    c = cursor.read_byte()
    if c == b"e" or c == b"E":
        buf += c
        sign = _require_byte(cursor)
        if sign == b"+" or sign == b"-":
            buf += sign
        else:
            cursor.unread()
        _expect_digits(cursor, buf)
    elif c is not None:
        cursor.unread()


def _parse_rfc8259_number(cursor: ByteCursor) -> TokenSpan:
    buf = bytearray()
    _scan_integer_part(cursor, buf)
    _scan_decimal_part(cursor, buf)
    _scan_exponent_part(cursor, buf)

    # Leading zeros and stray letters surface here as a bad terminator
    c = cursor.read_byte()
    if c is not None:
        if c not in _RFC8259_NUMBER_TERMINATORS:
            raise JSONSyntaxError("Invalid number")
        cursor.unread()
    return bytes(buf)


def _match_literal(literal: bytes, cursor: ByteCursor) -> TokenSpan:
    """Matches the rest of ``literal`` past its consumed first byte."""
    for i in range(1, len(literal)):
        if _require_byte(cursor) != literal[i : i + 1]:
            raise JSONSyntaxError("Invalid literal")
    return literal


def parse_bool(start: bytes, cursor: ByteCursor) -> TokenSpan:
    """Scans ``true`` when ``start`` is ``t`` and ``false`` otherwise."""
    with ProfileContext("parse_bool"):
        literal = b"true" if start == b"t" else b"false"
        return _match_literal(literal, cursor)


def parse_null(cursor: ByteCursor) -> TokenSpan:
    """Scans the remainder of ``null``."""
    with ProfileContext("parse_null"):
        return _match_literal(b"null", cursor)


def parse_name(cursor: ByteCursor) -> TokenSpan:
    """
    Scans an object member name up to and including its colon.

    Returns the quoted name; fillers after the colon are consumed.
    """
    with ProfileContext("parse_name"):
        if _require_byte(cursor) != b'"':
            raise JSONSyntaxError(
                "Expecting property name enclosed in double quotes"
            )

        name = parse_string(cursor)

        skip_fillers(cursor)
        if _require_byte(cursor) != b":":
            raise JSONSyntaxError("Expecting ':' delimiter")
        skip_fillers(cursor)

        return name


def parse_array(
    cursor: ByteCursor, config: NormalizeConfig = DEFAULT_CONFIG
) -> TokenSpan:
    """Scans array elements after the consumed '[' keeping their order."""
    with ProfileContext("parse_array"):
        if config.grammar is Grammar.RFC8259 and _consume_if(cursor, b"]"):
            return b"[]"

        data = bytearray(b"[")

        while True:
            skip_fillers(cursor)
            value = parse_value(cursor, config)
            if not value:
                raise JSONSyntaxError("Expecting value")
            if len(data) > 1:
                data += b","
            data += value

            skip_fillers(cursor)
            c = _require_byte(cursor)
            if c == b",":
                continue
            elif c == b"]":
                data += b"]"
                return bytes(data)
            raise JSONSyntaxError("Expecting ',' delimiter")


def _order_items(
    items: list[ObjectItem], config: NormalizeConfig
) -> list[ObjectItem]:
    """Applies the duplicate-name policy and sorts items by name bytes."""
    if config.duplicate_keys is DuplicateKeys.LAST_WINS:
        items = list(dict(items).items())
    elif config.duplicate_keys is DuplicateKeys.REJECT:
        if len({name for name, _ in items}) != len(items):
            raise JSONSyntaxError("Duplicate object key")

    # sorted() is stable, so KEEP leaves repeated names in source order
    return sorted(items, key=itemgetter(0))


def parse_object(
    cursor: ByteCursor, config: NormalizeConfig = DEFAULT_CONFIG
) -> TokenSpan:
    """
    Scans object members after the consumed '{' and re-emits them sorted.

    Names compare as raw bytes including their quotes, so ``"a\\u0041"`` and
    ``"aA"`` are different names.
    """
    with ProfileContext("parse_object"):
        if config.grammar is Grammar.RFC8259 and _consume_if(cursor, b"}"):
            return b"{}"

        items: list[ObjectItem] = []

        while True:
            skip_fillers(cursor)
            name = parse_name(cursor)
            if not name:
                raise JSONSyntaxError("Expecting property name")

            skip_fillers(cursor)
            value = parse_value(cursor, config)
            if not value:
                raise JSONSyntaxError("Expecting value")
            items.append((name, value))

            skip_fillers(cursor)
            c = _require_byte(cursor)
            if c == b",":
                continue
            elif c == b"}":
                break
            raise JSONSyntaxError("Expecting ',' delimiter")

        ordered = _order_items(items, config)
        members = [name + b":" + value for name, value in ordered]
        return b"{" + b",".join(members) + b"}"


def _normalize(src: Source, config: NormalizeConfig) -> TokenSpan:
    """
    Runs the value scanner over one document.

    Anything after the first complete value is ignored unless the config
    asks for it to be rejected.
    """
    with ProfileContext("normalize", len(src)):
        cursor = ByteCursor(src)
        try:
            if config.grammar is Grammar.RFC8259:
                skip_fillers(cursor)

            result = parse_value(cursor, config)

            if config.reject_trailing_data:
                skip_fillers(cursor)
                if not cursor.at_end:
                    raise JSONSyntaxError("Extra data")
        except NormalizeError as e:
            logger.debug(
                "normalize failed after %d of %d bytes: %s",
                cursor.pos,
                cursor.length,
                e,
            )
            raise

        return result


def normalize(src: Source, **kwargs: Any) -> bytes:
    """
    Returns the canonical form of a JSON document.

    Keyword arguments build a NormalizeConfig. Raises JSONSyntaxError for
    malformed input and UnexpectedEndOfInput for truncated input.
    """
    if not isinstance(src, bytes | bytearray | memoryview):
        raise TypeError(
            f"the JSON document must be bytes, not {type(src).__name__}"
        )

    config = NormalizeConfig(**kwargs)
    return _normalize(src, config)


def normalizes(s: str, **kwargs: Any) -> str:
    """Text counterpart of normalize, working on UTF-8."""
    if not isinstance(s, str):
        raise TypeError(
            f"the JSON document must be str, not {type(s).__name__}"
        )

    return normalize(s.encode("utf-8"), **kwargs).decode("utf-8")


def normalize_file(fp: IO[bytes], **kwargs: Any) -> bytes:
    """
    Normalizes the whole content of a binary file-like object.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return normalize(fp.read(), **kwargs)


def normalize_to(src: Source, fp: IO[bytes], **kwargs: Any) -> None:
    """
    Writes the canonical form of a document to a binary file-like object.
    """
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    fp.write(normalize(src, **kwargs))


def digest(src: Source, algorithm: str = "sha256", **kwargs: Any) -> str:
    """
    Hex digest of the canonical form, equal for equivalent documents.

    Raises ValueError for unknown algorithms and for variable-length ones
    such as shake_128, whose digests need an explicit length.
    """
    hasher = hashlib.new(algorithm)
    if hasher.digest_size == 0:
        raise ValueError(
            f"digest algorithm {algorithm!r} has no fixed digest size"
        )

    hasher.update(normalize(src, **kwargs))
    return hasher.hexdigest()


__all__ = [
    "DEFAULT_CONFIG",
    "ByteCursor",
    "DuplicateKeys",
    "Grammar",
    "HotPathStats",
    "JSONSyntaxError",
    "NormalizeConfig",
    "NormalizeError",
    "UnexpectedEndOfInput",
    "clear_hot_path_stats",
    "digest",
    "get_hot_path_stats",
    "normalize",
    "normalize_file",
    "normalize_to",
    "normalizes",
    "parse_array",
    "parse_bool",
    "parse_name",
    "parse_null",
    "parse_number",
    "parse_object",
    "parse_string",
    "parse_value",
    "skip_fillers",
]
