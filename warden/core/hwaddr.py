"""
Hardware Address Helpers
=========================

Validation and normalisation of 48-bit hardware addresses (BSSIDs).

Accepted notations (case-insensitive)::

    aa:bb:cc:dd:ee:ff     colon-delimited octets
    aa-bb-cc-dd-ee-ff     hyphen-delimited octets
    aabb.ccdd.eeff        dot-delimited 16-bit groups
    aabbccddeeff          bare hex

All of them normalise to lower-case colon notation, which is the key
used by :class:`~warden.core.models.AuthorizedRegistry`.

References:
    - IEEE. (2014). IEEE Std 802-2014, Section 8: MAC addresses.
"""

from __future__ import annotations

import re

HW_ADDR_PATTERN = (
    r"(?:[0-9a-f]{2}(?::[0-9a-f]{2}){5}"
    r"|[0-9a-f]{2}(?:-[0-9a-f]{2}){5}"
    r"|[0-9a-f]{4}(?:\.[0-9a-f]{4}){2}"
    r"|[0-9a-f]{12})"
)

_HW_ADDR_RE = re.compile(HW_ADDR_PATTERN, re.IGNORECASE)
_DELIMITERS_RE = re.compile(r"[:.\-]")


def is_hw_address(value: str) -> bool:
    """Return ``True`` if *value* is a 48-bit hardware address."""
    return _HW_ADDR_RE.fullmatch(value.strip()) is not None


def normalize_bssid(value: str) -> str:
    """Normalise a hardware address to lower-case colon notation.

    Values that are not valid hardware addresses are only stripped and
    lower-cased, so a lookup with garbage never matches a real key.
    """
    value = value.strip()
    if not is_hw_address(value):
        return value.lower()
    digits = _DELIMITERS_RE.sub("", value).lower()
    return ":".join(digits[i:i + 2] for i in range(0, 12, 2))


def mac_to_int(value: str) -> int:
    """Convert a hardware address to its 48-bit integer value.

    Raises:
        ValueError: If *value* is not a valid hardware address.
    """
    if not is_hw_address(value):
        raise ValueError(f"Not a hardware address: {value!r}")
    return int(_DELIMITERS_RE.sub("", value.strip()), 16)


def int_to_mac(number: int) -> str:
    """Convert a 48-bit integer into lower-case colon notation."""
    if not 0 <= number < 1 << 48:
        raise ValueError(f"Out of 48-bit range: {number}")
    digits = f"{number:012x}"
    return ":".join(digits[i:i + 2] for i in range(0, 12, 2))
