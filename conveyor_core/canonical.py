"""
Canonical payload serialization and hashing.

One source of truth for payload equality and recipe hashing:
- Objects: keys sorted (UTF-16 code unit order, so hashes match the
  browser-side implementation)
- Arrays: order preserved, elements canonicalized recursively
- MISSING: skipped inside objects (treated as a key that was never set)
- None: kept as `null` (explicit null is meaningful)

Numbers are written the way ECMAScript's Number#toString writes them, so the
same payload hashes identically in every language that implements this
algorithm: 1.0 -> "1", 1e-7 -> "1e-7", 1e21 -> "1e+21".
"""

import hashlib
import json
import math
import re
from collections.abc import Mapping
from decimal import Decimal


class _Missing:
    """Sentinel for "field never set" (distinct from None = explicit null)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "MISSING"

    def __bool__(self):
        return False

    def __reduce__(self):
        return (_Missing, ())


MISSING = _Missing()


def strip_missing(value):
    """Return a copy of value with MISSING removed from every mapping level."""
    if isinstance(value, Mapping):
        return {
            key: strip_missing(item)
            for key, item in value.items()
            if item is not MISSING
        }
    if isinstance(value, (list, tuple)):
        return [strip_missing(item) for item in value]
    return value


def _format_number(value) -> str:
    if isinstance(value, int):
        return str(value)
    if not math.isfinite(value):
        raise ValueError(f"Cannot canonicalize non-finite number: {value!r}")
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))

    # Shortest round-trip digits, then ECMAScript's exponent cutoffs
    text = repr(value)
    if "e" not in text:
        return text
    mantissa, exponent = text.split("e")
    exp = int(exponent)
    if -7 < exp < 21:
        return format(Decimal(text), "f")
    sign = "+" if exp > 0 else "-"
    return f"{mantissa}e{sign}{abs(exp)}"


def _utf16_key(key: str) -> bytes:
    return key.encode("utf-16-be", "surrogatepass")


_SURROGATE_PAIR = re.compile(r"[\ud800-\udbff][\udc00-\udfff]")
_LONE_SURROGATE = re.compile(r"[\ud800-\udfff]")


def _dump_string(text: str) -> str:
    """
    JSON string literal as JSON.stringify writes it: surrogate pairs become
    the character they encode, unpaired surrogates are escaped as \\udXXX.
    """
    text = _SURROGATE_PAIR.sub(
        lambda m: m.group().encode("utf-16-be", "surrogatepass").decode("utf-16-be"), text
    )
    dumped = json.dumps(text, ensure_ascii=False)
    return _LONE_SURROGATE.sub(lambda m: "\\u%04x" % ord(m.group()), dumped)


def canonical_stringify(value) -> str:
    """
    Serialize an already-stripped value with stable key ordering.

    MISSING at the top level or inside an array is written as null,
    matching JSON.stringify. Inside a mapping it is skipped.
    """
    if value is None or value is MISSING:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _format_number(value)
    if isinstance(value, str):
        return _dump_string(value)
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(canonical_stringify(item) for item in value) + "]"
    if isinstance(value, Mapping):
        pairs = []
        for key in sorted(value.keys(), key=_utf16_key):
            item = value[key]
            if item is MISSING:
                continue
            pairs.append(_dump_string(key) + ":" + canonical_stringify(item))
        return "{" + ",".join(pairs) + "}"
    raise TypeError(f"Cannot canonicalize value of type {type(value).__name__}")


def canonicalize_payload(payload) -> str:
    """Strip MISSING values, then stringify with stable ordering."""
    return canonical_stringify(strip_missing(payload))


def payloads_equal(a, b) -> bool:
    """True when both payloads have the same canonical form."""
    return canonicalize_payload(a) == canonicalize_payload(b)


def hash_canonical(value) -> str:
    """SHA-256 of the canonical form, as 64 lowercase hex characters."""
    return hashlib.sha256(canonicalize_payload(value).encode("utf-8")).hexdigest()
