from dataclasses import dataclass, field

from vcfio import headermeta as META
from vcfio.errors import ParseError, HeaderParseError
from vcfio.headerparser import parse_header_content, parse_samples
from vcfio.util import as_bytes, text

__all__ = [
    "HeaderLine",
    "Header",
]


@dataclass(frozen=True)
class HeaderLine(object):
    """A single ``##`` header line.

    Attributes
    ----------
    line : bytes
        The exact source text including its line terminator. This is
        what gets written back.
    contents : object
        Typed, read-only projection of the line (see
        :mod:`vcfio.headermeta`).
    """

    line: bytes
    contents: object

    @classmethod
    def parse(cls, line):
        """Parse a raw header line.

        Raises
        ------
        ParseError
            If the line does not match the header grammar.
        """
        line = as_bytes(line)
        return cls(line=line, contents=parse_header_content(line))

    @classmethod
    def from_contents(cls, contents):
        """Create a header line by rendering typed contents."""
        return cls(line=bytes(contents) + b"\n", contents=contents)

    def __str__(self):
        return text(self.line.rstrip(b"\r\n"))


def _index(items, cls):
    # last declaration of an id wins
    index = {}
    for i, item in enumerate(items):
        if type(item.contents) is cls:
            index[item.contents.id] = i
    return index


@dataclass(frozen=True)
class Header(object):
    """VCF header: meta-information lines and sample names.

    The lookup tables are derived once on construction. A header is
    shared by the reader and by every record parsed from the same
    stream so it must not be modified; use :meth:`with_lines` to derive
    an extended header.

    Attributes
    ----------
    items : tuple
        :class:`HeaderLine` objects in declaration order.
    samples : tuple
        Sample names (bytes) in column order.
    """

    items: tuple = ()
    samples: tuple = ()
    _info: dict = field(init=False, repr=False, compare=False)
    _format: dict = field(init=False, repr=False, compare=False)
    _alt: dict = field(init=False, repr=False, compare=False)
    _filter: dict = field(init=False, repr=False, compare=False)
    _contig: dict = field(init=False, repr=False, compare=False)
    _samples: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        items = tuple(self.items)
        samples = tuple(as_bytes(s) for s in self.samples)
        object.__setattr__(self, "items", items)
        object.__setattr__(self, "samples", samples)
        object.__setattr__(self, "_info", _index(items, META.InfoField))
        object.__setattr__(self, "_format", _index(items, META.FormatField))
        object.__setattr__(self, "_alt", _index(items, META.AltField))
        object.__setattr__(self, "_filter", _index(items, META.FilterField))
        object.__setattr__(self, "_contig", _index(items, META.ContigField))
        object.__setattr__(
            self, "_samples", {name: i for i, name in enumerate(samples)}
        )

    @classmethod
    def from_lines(cls, lines, samples=()):
        """Create a header from raw ``##`` lines and an optional
        ``#CHROM`` line or sample list.

        Parameters
        ----------
        lines : iterable
            Raw header lines (bytes or str). A ``#CHROM`` line, if
            present, supplies the sample names.
        samples : iterable
            Sample names used if no ``#CHROM`` line is given.

        Returns
        -------
        header : Header
            The new header.
        """
        items = []
        for i, line in enumerate(lines):
            line = as_bytes(line)
            try:
                if line.startswith(b"##"):
                    items.append(HeaderLine.parse(line))
                elif line.startswith(b"#"):
                    samples = parse_samples(line)
                else:
                    raise ParseError("not a header line")
            except ParseError as e:
                raise HeaderParseError(i + 1) from e
        return cls(items, samples)

    def with_lines(self, *lines):
        """Return a new header with additional lines appended.

        Parameters
        ----------
        lines : HeaderLine, bytes, str or header contents
            Lines to append.
        """
        items = list(self.items)
        for line in lines:
            if isinstance(line, HeaderLine):
                items.append(line)
            elif isinstance(line, (bytes, str)):
                items.append(HeaderLine.parse(line))
            else:
                items.append(HeaderLine.from_contents(line))
        return type(self)(items, self.samples)

    def _lookup(self, index, id):
        i = index.get(as_bytes(id))
        if i is None:
            return None
        return self.items[i].contents

    def info(self, id):
        """Return the INFO declaration for an id or None."""
        return self._lookup(self._info, id)

    def format(self, id):
        """Return the FORMAT declaration for an id or None."""
        return self._lookup(self._format, id)

    def alt(self, id):
        return self._lookup(self._alt, id)

    def filter(self, id):
        return self._lookup(self._filter, id)

    def contig(self, id):
        return self._lookup(self._contig, id)

    def sample_index(self, name):
        """Return the column index of a sample or None."""
        return self._samples.get(as_bytes(name))

    @property
    def fileformat(self):
        for item in self.items:
            if isinstance(item.contents, META.FileFormat):
                return item.contents.version
        return None
