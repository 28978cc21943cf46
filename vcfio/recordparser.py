"""Incremental parsing of VCF data lines into reusable records.

Every list held by a record is refilled in place and truncated to the
new number of entries, so a single record can be reused for all lines
of a file without reallocating its containers.

INFO values and per sample values are stored exactly as they appear in
the line, percent escapes included, so that writing a record back
reproduces its source bytes. Escapes are resolved by the record lookups.
"""

import re
import math

from vcfio.errors import ParseError
from vcfio.headerparser import strip_terminator

__all__ = [
    "parse_record",
    "parse_quality",
    "parse_info",
    "parse_genotype",
    "fill_values",
]

MISSING = b"."

_QUALITY = re.compile(rb"(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def _offset(columns, index):
    # byte offset of a tab separated column within the line
    return sum(len(c) + 1 for c in columns[:index])


def fill_values(buffer, field, separator):
    """Refill a list with the separated values of a field.

    A field consisting of the missing value ``.`` empties the list.

    Parameters
    ----------
    buffer : list
        List to refill in place.
    field : bytes
        Raw field.
    separator : bytes
        Value separator.
    """
    if field == MISSING:
        buffer.clear()
    else:
        buffer[:] = field.split(separator)


def parse_quality(field, offset=0):
    """Parse a QUAL field.

    Parameters
    ----------
    field : bytes
        Raw field.

    Returns
    -------
    quality : float
        Quality or None if missing.

    Raises
    ------
    ParseError
        If the field is not a finite unsigned decimal number.
    """
    if field == MISSING:
        return None
    if _QUALITY.fullmatch(field) is None:
        raise ParseError("QUAL is not a number", offset)
    quality = float(field)
    if math.isinf(quality):
        raise ParseError("QUAL is not finite", offset)
    return quality


def parse_info(field, info, offset=0):
    """Parse an INFO field into a list of (key, values) pairs.

    Parameters
    ----------
    field : bytes
        Raw field.
    info : list
        List of (key, values) tuples, refilled in place. The values
        lists of existing entries are reused. Values keep their percent
        escapes.

    Raises
    ------
    ParseError
        If an entry has an empty key.
    """
    if field == MISSING or not field:
        info.clear()
        return
    if field.endswith(b";"):
        # tolerate a single trailing separator
        field = field[:-1]
    entries = field.split(b";")
    length = len(info)
    for index, entry in enumerate(entries):
        key, sep, value = entry.partition(b"=")
        if not key:
            raise ParseError("empty INFO key", offset)
        if index < length:
            values = info[index][1]
        else:
            values = []
        if sep:
            values[:] = value.split(b",")
        else:
            # flag
            values.clear()
        if index < length:
            info[index] = (key, values)
        else:
            info.append((key, values))
    del info[len(entries):]


def parse_genotype(columns, genotype):
    """Parse sample columns into nested genotype lists.

    Parameters
    ----------
    columns : list
        Raw sample columns.
    genotype : list
        List of rows (one per sample) of fields (one per FORMAT key)
        of values, refilled in place.

    Notes
    -----
    A sample column of ``.`` becomes an empty row and a field of ``.``
    becomes an empty list.
    """
    length = len(genotype)
    for index, column in enumerate(columns):
        if index < length:
            row = genotype[index]
        else:
            row = []
            genotype.append(row)
        if column == MISSING:
            row.clear()
            continue
        fields = column.split(b":")
        width = len(row)
        for i, field in enumerate(fields):
            if i < width:
                fill_values(row[i], field, b",")
            else:
                values = []
                fill_values(values, field, b",")
                row.append(values)
        del row[len(fields):]
    del genotype[len(columns):]


def parse_record(line, record):
    """Parse a VCF data line into an existing record.

    Parameters
    ----------
    line : bytes
        Raw data line terminated by ``\\r\\n``, ``\\n`` or nothing.
    record : Record
        Record whose fields are overwritten in place. Columns following
        the last column present in the line are cleared.

    Raises
    ------
    ParseError
        If the line does not match the record grammar. The record may
        then hold a partially parsed line, with its key lookups rebuilt
        for whatever it holds.
    """
    content = strip_terminator(line)
    for char in (b"\r", b"\n"):
        if char in content:
            raise ParseError("line terminator within record", content.find(char))
    columns = content.split(b"\t")
    if len(columns) < 5:
        raise ParseError("too few columns", offset=len(content))

    chromosome = columns[0]
    if not chromosome:
        raise ParseError("empty CHROM column")
    position = columns[1]
    if not position.isdigit():
        raise ParseError("POS is not a number", offset=_offset(columns, 1))
    reference = columns[3]
    if not reference:
        raise ParseError("empty REF column", offset=_offset(columns, 3))

    record.chromosome = chromosome
    record.position = int(position)
    fill_values(record.id, columns[2], b",")
    record.reference = reference
    fill_values(record.alternative, columns[4], b",")

    # each optional column requires all preceding columns
    n = len(columns)
    try:
        if n > 5:
            record.quality = parse_quality(columns[5], _offset(columns, 5))
        else:
            record.quality = None
        if n > 6:
            fill_values(record.filter, columns[6], b",")
        else:
            record.filter.clear()
        if n > 7:
            parse_info(columns[7], record.info, _offset(columns, 7))
        else:
            record.info.clear()
        if n > 8:
            fill_values(record.format, columns[8], b":")
        else:
            record.format.clear()
        parse_genotype(columns[9:], record.genotype)
    finally:
        # lookups must match the lists even after a failure
        record.recreate_info_and_genotype_index()
