"""
Canonical dump baselines built from general-purpose JSON libraries.

Each function decodes a document and re-encodes it with sorted keys and
compact separators, the closest equivalent of jnorm.normalize they offer.
"""

import json
from collections.abc import Callable

import orjson
import ujson  # type: ignore[import-untyped]

import jnorm


def stdlib_canonical(src: bytes) -> bytes:
    return json.dumps(
        json.loads(src),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    ).encode("utf-8")


def orjson_canonical(src: bytes) -> bytes:
    return orjson.dumps(orjson.loads(src), option=orjson.OPT_SORT_KEYS)


def ujson_canonical(src: bytes) -> bytes:
    return ujson.dumps(
        ujson.loads(src),
        sort_keys=True,
        ensure_ascii=False,
        escape_forward_slashes=False,
    ).encode("utf-8")


CANONICALIZERS: dict[str, Callable[[bytes], bytes]] = {
    "stdlib_json": stdlib_canonical,
    "orjson": orjson_canonical,
    "ujson": ujson_canonical,
    "jnorm": jnorm.normalize,
}
