from vcfio.codec import decode, encode
from vcfio.recordparser import parse_record
from vcfio.util import as_bytes, format_quality, text

__all__ = [
    "NOT_FOUND",
    "Record",
    "format_info_field",
    "format_sample_field",
    "format_record",
]

# marks a stale entry of an index cache
NOT_FOUND = -1

MISSING = b"."


class Record(object):
    """A single VCF data line.

    A record is meant to be allocated once and refilled by
    :meth:`Reader.next_record` (or :meth:`parse`) for every line of a
    file.

    Attributes
    ----------
    chromosome : bytes
        CHROM column.
    position : int
        1-based POS column.
    id : list
        ID values, empty if missing.
    reference : bytes
        REF column.
    alternative : list
        ALT alleles, empty if missing.
    quality : float
        QUAL column or None if missing.
    filter : list
        FILTER codes, empty if missing.
    info : list
        (key, values) tuples in their original order. Flags have an
        empty values list. Values are held as written in the file,
        percent escapes included.
    format : list
        FORMAT keys.
    genotype : list
        One row per sample, one list of values per FORMAT key. Values
        are held as written in the file, percent escapes included.

    Notes
    -----
    Key lookups go through index caches which are rebuilt on every
    parse and kept up to date by the ``insert_*`` methods. After editing
    ``info``, ``format`` or ``genotype`` directly you must call
    :meth:`recreate_info_and_genotype_index`.
    """

    def __init__(self, header):
        self.header = header
        self.chromosome = b""
        self.position = 0
        self.id = []
        self.reference = b""
        self.alternative = []
        self.quality = None
        self.filter = []
        self.info = []
        self.format = []
        self.genotype = []
        self._info_index = {}
        self._format_index = {}

    @classmethod
    def from_line(cls, header, line):
        """Create a new record from a raw data line."""
        record = cls(header)
        record.parse(line)
        return record

    def parse(self, line):
        """Overwrite this record with a raw data line.

        Raises
        ------
        ParseError
            If the line does not match the record grammar.
        """
        parse_record(as_bytes(line), self)

    def _fields(self):
        return (
            self.chromosome,
            self.position,
            self.id,
            self.reference,
            self.alternative,
            self.quality,
            self.filter,
            self.info,
            self.format,
            self.genotype,
        )

    def __eq__(self, other):
        if not isinstance(other, Record):
            return NotImplemented
        return self._fields() == other._fields()

    def __repr__(self):
        return "Record({!r}, {!r}, {!r}, {!r}, {!r})".format(
            self.chromosome, self.position, self.id, self.reference, self.alternative
        )

    def __str__(self):
        return text(format_record(self).rstrip(b"\n"))

    def __bytes__(self):
        return format_record(self)

    def copy(self):
        """Return an independent copy sharing the same header."""
        record = type(self)(self.header)
        record.chromosome = self.chromosome
        record.position = self.position
        record.id = list(self.id)
        record.reference = self.reference
        record.alternative = list(self.alternative)
        record.quality = self.quality
        record.filter = list(self.filter)
        record.info = [(k, list(v)) for k, v in self.info]
        record.format = list(self.format)
        record.genotype = [[list(f) for f in row] for row in self.genotype]
        record.recreate_info_and_genotype_index()
        return record

    def recreate_info_and_genotype_index(self):
        """Rebuild the INFO and FORMAT key caches.

        Call this after modifying ``info``, ``format`` or ``genotype``
        directly. If a key occurs more than once the last occurrence is
        indexed.
        """
        info_index = self._info_index
        for k in info_index:
            info_index[k] = NOT_FOUND
        for i, (k, _) in enumerate(self.info):
            info_index[k] = i

        format_index = self._format_index
        for k in format_index:
            format_index[k] = NOT_FOUND
        for i, k in enumerate(self.format):
            format_index[k] = i

    def _info_position(self, key):
        i = self._info_index.get(key, NOT_FOUND)
        if i == NOT_FOUND:
            return None
        return i

    def _format_position(self, key):
        i = self._format_index.get(key, NOT_FOUND)
        if i == NOT_FOUND:
            return None
        return i

    def _genotype_field(self, sample, key):
        s = self.header.sample_index(sample)
        if s is None or s >= len(self.genotype):
            return None
        f = self._format_position(as_bytes(key))
        row = self.genotype[s]
        if f is None or f >= len(row):
            return None
        return row[f]

    def get_info(self, key):
        """Values of an INFO key.

        Parameters
        ----------
        key : bytes or str
            INFO key.

        Returns
        -------
        values : tuple
            Percent-decoded values of the key (empty for a flag) or None
            if absent.
        """
        i = self._info_position(as_bytes(key))
        if i is None:
            return None
        return tuple(decode(v) for v in self.info[i][1])

    def info_mut(self, key):
        """Mutable values list of an INFO key or None if absent.

        Values in this list are raw and must be percent-encoded.
        """
        i = self._info_position(as_bytes(key))
        if i is None:
            return None
        return self.info[i][1]

    def insert_info(self, key, values):
        """Set the values of an INFO key.

        Parameters
        ----------
        key : bytes or str
            INFO key.
        values : iterable
            New values (bytes or str), empty for a flag. Reserved
            characters are percent-encoded.

        Returns
        -------
        previous : list
            The replaced raw values list, or None if the key was appended.
        """
        key = as_bytes(key)
        values = [encode(as_bytes(v)) for v in values]
        i = self._info_position(key)
        if i is None:
            self._info_index[key] = len(self.info)
            self.info.append((key, values))
            return None
        previous = self.info[i][1]
        self.info[i] = (key, values)
        return previous

    def get_genotype(self, sample, key):
        """Values of a FORMAT key for a sample.

        Parameters
        ----------
        sample : bytes or str
            Sample name.
        key : bytes or str
            FORMAT key.

        Returns
        -------
        values : tuple
            Percent-decoded values of the key for the sample (empty if
            missing) or None if the sample or key is absent.
        """
        values = self._genotype_field(sample, key)
        if values is None:
            return None
        return tuple(decode(v) for v in values)

    def genotype_mut(self, sample, key):
        """Mutable values list of a FORMAT key for a sample or None.

        Values in this list are raw and must be percent-encoded.
        """
        return self._genotype_field(sample, key)

    def insert_genotype(self, sample, key, values):
        """Set the values of a FORMAT key for a single sample.

        The key is appended to FORMAT if absent. The sample's row is
        padded with missing fields up to the key's column, rows of
        other samples are left unchanged.

        Parameters
        ----------
        sample : bytes or str
            Sample name.
        key : bytes or str
            FORMAT key.
        values : iterable
            New values (bytes or str). Reserved characters are
            percent-encoded.

        Returns
        -------
        previous : list
            The replaced raw values list, or None if the field was added.

        Raises
        ------
        KeyError
            If the sample is not in the header.
        """
        s = self.header.sample_index(sample)
        if s is None:
            raise KeyError(sample)
        key = as_bytes(key)
        values = [encode(as_bytes(v)) for v in values]
        f = self._format_position(key)
        if f is None:
            f = len(self.format)
            self._format_index[key] = f
            self.format.append(key)
        while len(self.genotype) <= s:
            self.genotype.append([])
        row = self.genotype[s]
        while len(row) < f:
            row.append([])
        if f < len(row):
            previous = row[f]
            row[f] = values
            return previous
        row.append(values)
        return None


def _join(values, separator=b","):
    if not values:
        return MISSING
    return separator.join(values)


def format_info_field(info):
    """Format (key, values) pairs into a VCF INFO field.

    Parameters
    ----------
    info : list
        (key, values) tuples, flags have no values. Values are written
        as held, escapes included.

    Returns
    -------
    field : bytes
        VCF INFO field.
    """
    if not info:
        return MISSING
    parts = []
    for k, v in info:
        if v:
            parts.append(k + b"=" + b",".join(v))
        else:
            parts.append(k)
    return b";".join(parts)


def format_sample_field(format, genotype):
    """Format FORMAT keys and per sample values into VCF columns.

    Parameters
    ----------
    format : list
        FORMAT keys.
    genotype : list
        Rows of per key values, one row per sample.

    Returns
    -------
    columns : bytes
        Tab separated FORMAT and sample columns.
    """
    columns = [_join(format, b":")]
    for row in genotype:
        if row:
            columns.append(b":".join([_join(f) for f in row]))
        else:
            columns.append(MISSING)
    return b"\t".join(columns)


def format_record(record):
    """Format a record as a VCF data line.

    Parameters
    ----------
    record : Record
        Record to format.

    Returns
    -------
    line : bytes
        VCF data line terminated by a newline.
    """
    fields = [
        record.chromosome,
        b"%d" % record.position,
        _join(record.id),
        record.reference,
        _join(record.alternative),
        format_quality(record.quality),
        _join(record.filter),
        format_info_field(record.info),
    ]
    if record.format or record.genotype:
        fields.append(format_sample_field(record.format, record.genotype))
    return b"\t".join(fields) + b"\n"
