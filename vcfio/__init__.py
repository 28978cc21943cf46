from vcfio.version import __version__
from vcfio.errors import (
    VCFError,
    ParseError,
    HeaderParseError,
    RecordParseError,
    VCFIOError,
    VCFEncodingError,
)
from vcfio.header import Header, HeaderLine
from vcfio.records import Record
from vcfio.reader import Reader
from vcfio.writer import Writer

__all__ = [
    "__version__",
    "VCFError",
    "ParseError",
    "HeaderParseError",
    "RecordParseError",
    "VCFIOError",
    "VCFEncodingError",
    "Header",
    "HeaderLine",
    "Record",
    "Reader",
    "Writer",
]
