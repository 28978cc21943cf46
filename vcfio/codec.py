"""Percent-encoding of reserved characters within VCF field values."""

import re

__all__ = [
    "RESERVED",
    "encode",
    "decode",
]

RESERVED = ":;=%,\r\n\t"

_ESCAPES = {
    ":": "%3A",
    ";": "%3B",
    "=": "%3D",
    "%": "%25",
    ",": "%2C",
    "\r": "%0D",
    "\n": "%0A",
    "\t": "%09",
}

_ENCODE_STR = dict(_ESCAPES)
_ENCODE_BYTES = {k.encode(): v.encode() for k, v in _ESCAPES.items()}
_DECODE_STR = {v[1:]: k for k, v in _ESCAPES.items()}
_DECODE_BYTES = {v[1:].encode(): k.encode() for k, v in _ESCAPES.items()}

_RESERVED_STR = re.compile("[:;=%,\r\n\t]")
_RESERVED_BYTES = re.compile(b"[:;=%,\r\n\t]")

# an escape consumes up to two characters even when unrecognised
_ESCAPE_STR = re.compile("%(.{0,2})", re.DOTALL)
_ESCAPE_BYTES = re.compile(b"%(.{0,2})", re.DOTALL)


def _encode_match(table):
    def replace(match):
        return table[match.group()]

    return replace


def _decode_match(table):
    def replace(match):
        return table.get(match.group(1), match.group())

    return replace


_encode_str = _encode_match(_ENCODE_STR)
_encode_bytes = _encode_match(_ENCODE_BYTES)
_decode_str = _decode_match(_DECODE_STR)
_decode_bytes = _decode_match(_DECODE_BYTES)


def encode(value):
    """Percent-encode the reserved characters of a VCF value.

    Parameters
    ----------
    value : bytes or str
        Raw value.

    Returns
    -------
    encoded : bytes or str
        Value with each of ``: ; = % , CR LF TAB`` replaced by its
        ``%XY`` escape. The input object itself is returned if it
        contains no reserved character.
    """
    if isinstance(value, str):
        pattern, replace = _RESERVED_STR, _encode_str
    else:
        pattern, replace = _RESERVED_BYTES, _encode_bytes
    if pattern.search(value) is None:
        return value
    return pattern.sub(replace, value)


def decode(value):
    """Reverse the percent-encoding of a VCF value.

    Unrecognised escapes are passed through literally.

    Parameters
    ----------
    value : bytes or str
        Encoded value.

    Returns
    -------
    decoded : bytes or str
        Decoded value, or the input object itself if it contains no ``%``.
    """
    if isinstance(value, str):
        if "%" not in value:
            return value
        return _ESCAPE_STR.sub(_decode_str, value)
    if b"%" not in value:
        return value
    return _ESCAPE_BYTES.sub(_decode_bytes, value)
