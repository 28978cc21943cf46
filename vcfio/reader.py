import warnings

from vcfio.errors import ParseError, HeaderParseError, RecordParseError, VCFIOError
from vcfio.header import Header, HeaderLine
from vcfio.headerparser import parse_samples
from vcfio.recordparser import parse_record
from vcfio.records import Record

__all__ = [
    "Reader",
]

MISSING_COLUMN_HEADER = (
    "Data line encountered before the #CHROM line at line: {line_number}"
)


class Reader(object):
    """Read VCF header and records from a binary stream.

    The header is parsed on construction. Records are then read one
    line at a time with :meth:`next_record`, which refills a caller
    owned record, or by iterating over the reader, which yields a new
    record per line.

    Parameters
    ----------
    stream : file-like
        Readable binary stream, already decompressed.

    Attributes
    ----------
    header : Header
        Header shared by all records read from the stream.
    line_number : int
        Number of lines consumed so far.
    """

    def __init__(self, stream):
        self._stream = stream
        self._unprocessed = None
        self.line_number = 0
        self.header = self._read_header()

    def _readline(self):
        try:
            line = self._stream.readline()
        except OSError as e:
            raise VCFIOError(self.line_number + 1) from e
        if line:
            self.line_number += 1
        return line

    def _read_header(self):
        items = []
        samples = []
        while True:
            line = self._readline()
            if not line:
                break
            try:
                if line.startswith(b"##"):
                    items.append(HeaderLine.parse(line))
                    continue
                elif line.startswith(b"#"):
                    samples = parse_samples(line)
                    break
            except ParseError as e:
                raise HeaderParseError(self.line_number) from e
            # replayed as the first record
            warnings.warn(MISSING_COLUMN_HEADER.format(line_number=self.line_number))
            self._unprocessed = (line, self.line_number)
            break
        return Header(items, samples)

    def new_record(self):
        """Return an empty record bound to this reader's header."""
        return Record(self.header)

    def next_record(self, record):
        """Parse the next data line into an existing record.

        Parameters
        ----------
        record : Record
            Record to refill.

        Returns
        -------
        success : bool
            False at the end of the stream, in which case the record is
            left untouched.

        Raises
        ------
        RecordParseError
            If the line is malformed. Reading may continue with the
            following line.
        """
        if self._unprocessed is not None:
            line, line_number = self._unprocessed
            self._unprocessed = None
        else:
            line = self._readline()
            if not line:
                return False
            line_number = self.line_number
        try:
            parse_record(line, record)
        except ParseError as e:
            raise RecordParseError(line_number) from e
        return True

    def __iter__(self):
        while True:
            record = Record(self.header)
            if not self.next_record(record):
                return
            yield record
