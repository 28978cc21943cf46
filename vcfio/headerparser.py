"""Parsing of VCF meta-information (``##``) lines and the ``#CHROM`` line."""

import re

from vcfio import headermeta as META
from vcfio.errors import ParseError

__all__ = [
    "parse_header_content",
    "parse_header_entries",
    "parse_number",
    "parse_value_type",
    "parse_version",
    "parse_samples",
    "strip_terminator",
]

_INT32_MAX = 2 ** 31 - 1

# key=value where the value is either quoted or a bare token
_ENTRY = re.compile(
    rb'([^>,= \r\n\t]+)=(?:"([^"]*)"|([^>, \r\n\t]+))'
)
_OTHER = re.compile(rb"([^=\r\n]+)(?:=(.*))?", re.DOTALL)

FIXED_COLUMNS = b"#CHROM\tPOS\tID\tREF\tALT"
OPTIONAL_COLUMNS = (b"QUAL", b"FILTER", b"INFO", b"FORMAT")
STRUCTURED_KEYS = (b"contig", b"INFO", b"FORMAT", b"ALT", b"FILTER")


def strip_terminator(line):
    """Remove a trailing ``\\r\\n`` or ``\\n`` from a line."""
    if line.endswith(b"\r\n"):
        return line[:-2]
    elif line.endswith(b"\n"):
        return line[:-1]
    return line


def parse_number(token):
    """Map a ``Number`` token onto a :class:`headermeta.Number`."""
    number = META.NUMBERS.get(token)
    if number is not None:
        return number
    if token.isdigit():
        count = int(token)
        if count <= _INT32_MAX:
            return META.Number.fixed(count)
    return META.Number.other(token)


def parse_value_type(token):
    """Map a ``Type`` token onto a :class:`headermeta.ValueType`."""
    value_type = META.VALUE_TYPES.get(token)
    if value_type is not None:
        return value_type
    return META.ValueType.other(token)


def parse_version(token):
    """Map a ``fileformat`` value onto a :class:`headermeta.VCFVersion`."""
    version = META.VERSIONS.get(token)
    if version is not None:
        return version
    return META.VCFVersion.other(token)


def parse_header_entries(content, start=0):
    """Parse the comma separated entries of a bracketed header value.

    Parameters
    ----------
    content : bytes
        Header line content.
    start : int
        Offset of the first entry (just after ``<``).

    Returns
    -------
    entries : list
        List of (key, value) tuples in declaration order with any
        surrounding quotes removed.
    end : int
        Offset of the first byte following the entries.
    """
    entries = []
    position = start
    while True:
        match = _ENTRY.match(content, position)
        if match is None:
            break
        key, quoted, bare = match.groups()
        entries.append((key, bare if quoted is None else quoted))
        position = match.end()
        if content.startswith(b",", position):
            position += 1
        else:
            break
    return entries, position


def _find_key(entries, key):
    for k, v in entries:
        if k == key:
            return v
    return None


def _require_key(entries, key, tag):
    value = _find_key(entries, key)
    if value is None:
        raise ParseError(
            "{} header has no {} entry".format(tag.decode(), key.decode())
        )
    return value


def _bracketed(content, tag):
    # tag=<entries> with nothing following the closing bracket
    start = len(tag) + 2
    entries, end = parse_header_entries(content, start)
    if content[end:] != b">":
        raise ParseError(
            "malformed {} header entries".format(tag.decode()), offset=end + 2
        )
    return entries


def _parse_info_like(content, tag, cls):
    entries = _bracketed(content, tag)
    return cls(
        id=_require_key(entries, b"ID", tag),
        number=parse_number(_require_key(entries, b"Number", tag)),
        type=parse_value_type(_require_key(entries, b"Type", tag)),
        description=_require_key(entries, b"Description", tag),
        source=_find_key(entries, b"Source"),
        version=_find_key(entries, b"Version"),
    )


def _parse_described(content, tag, cls):
    entries = _bracketed(content, tag)
    return cls(
        id=_require_key(entries, b"ID", tag),
        description=_require_key(entries, b"Description", tag),
    )


def _parse_contig(content):
    entries = _bracketed(content, b"contig")
    length = _find_key(entries, b"length")
    if length is not None:
        length = int(length) if length.isdigit() else None
    return META.ContigField(id=_require_key(entries, b"ID", b"contig"), length=length)


def _parse_other(content):
    match = _OTHER.fullmatch(content)
    if match is None:
        raise ParseError("empty header line", offset=2)
    key, value = match.groups()
    return META.OtherField(key=key, value=value)


def parse_header_content(line):
    """Parse a single ``##`` header line into its typed contents.

    Parameters
    ----------
    line : bytes
        Raw header line with or without its line terminator.

    Returns
    -------
    contents : object
        One of the :mod:`vcfio.headermeta` field classes.

    Raises
    ------
    ParseError
        If the line does not start with ``##``, or if an INFO, FORMAT,
        ALT, FILTER or contig line is malformed or lacks a required entry.
    """
    if not line.startswith(b"##"):
        raise ParseError("header line does not start with ##")
    content = strip_terminator(line)[2:]
    if b"\r" in content or b"\n" in content:
        raise ParseError("line terminator within header line", offset=2)
    key = content.split(b"=", 1)[0]
    if key in STRUCTURED_KEYS and not content.startswith(key + b"=<"):
        raise ParseError("{} header is not bracketed".format(key.decode()), offset=2)

    if content.startswith(b"fileformat="):
        return META.FileFormat(parse_version(content[len(b"fileformat="):]))
    elif content.startswith(b"contig=<"):
        return _parse_contig(content)
    elif content.startswith(b"INFO=<"):
        return _parse_info_like(content, b"INFO", META.InfoField)
    elif content.startswith(b"FORMAT=<"):
        return _parse_info_like(content, b"FORMAT", META.FormatField)
    elif content.startswith(b"ALT=<"):
        return _parse_described(content, b"ALT", META.AltField)
    elif content.startswith(b"FILTER=<"):
        return _parse_described(content, b"FILTER", META.FilterField)
    return _parse_other(content)


def parse_samples(line):
    """Parse the ``#CHROM`` column header line.

    Parameters
    ----------
    line : bytes
        Raw column header line with or without its line terminator.

    Returns
    -------
    samples : list
        Sample names (bytes) in column order, empty if the line has
        no FORMAT column or no sample columns.

    Raises
    ------
    ParseError
        If the fixed columns are missing, the optional columns are out of
        order or a sample name is empty.
    """
    content = strip_terminator(line)
    if not content.startswith(FIXED_COLUMNS):
        raise ParseError("column header does not start with #CHROM")
    position = len(FIXED_COLUMNS)
    for column in OPTIONAL_COLUMNS:
        if position == len(content):
            return []
        expect = b"\t" + column
        if not content.startswith(expect, position):
            raise ParseError("unexpected column header", offset=position)
        position += len(expect)
        if position < len(content) and content[position] != 9:
            # column name continues past the expected token
            raise ParseError("unexpected column header", offset=position)
    if position == len(content):
        return []
    # FORMAT followed by tab separated sample names
    samples = content[position + 1:].split(b"\t")
    if samples == [b""]:
        return []
    for sample in samples:
        if not sample or b"\r" in sample or b"\n" in sample:
            raise ParseError("invalid sample name", offset=position)
    return samples
