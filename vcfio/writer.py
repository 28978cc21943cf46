from vcfio.errors import VCFIOError
from vcfio.headermeta import columns
from vcfio.records import format_record

__all__ = [
    "Writer",
]


class Writer(object):
    """Write a VCF header and records to a binary stream.

    Header lines are written verbatim followed by the column header,
    which lists FORMAT and the sample names only if the header has
    samples.

    Parameters
    ----------
    stream : file-like
        Writable binary stream.
    header : Header
        Header to write.
    """

    def __init__(self, stream, header):
        self._stream = stream
        self.header = header
        self.line_number = 0
        for item in header.items:
            line = item.line
            if not line.endswith(b"\n"):
                line += b"\n"
            self._write(line)
        self._write(columns(header.samples) + b"\n")

    def _write(self, line):
        self.line_number += 1
        try:
            self._stream.write(line)
        except OSError as e:
            raise VCFIOError(self.line_number) from e

    def write_record(self, record):
        """Write a record as a single data line."""
        self._write(format_record(record))
