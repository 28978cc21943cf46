from dataclasses import dataclass

from vcfio import version
from vcfio.util import as_bytes


# Number kinds with an escape for fixed counts and unknown tokens
FIXED = "fixed"
OTHER = "other"


def _coerce(obj, *names):
    # frozen dataclasses accept str but always store bytes
    for name in names:
        value = getattr(obj, name)
        if value is not None:
            object.__setattr__(obj, name, as_bytes(value))


@dataclass(frozen=True)
class Number(object):
    kind: str
    count: int = None
    raw: bytes = None

    @classmethod
    def fixed(cls, count):
        return cls(FIXED, count=int(count))

    @classmethod
    def other(cls, raw):
        return cls(OTHER, raw=as_bytes(raw))

    def __bytes__(self):
        if self.kind == FIXED:
            return str(self.count).encode()
        elif self.kind == OTHER:
            return self.raw
        return self.kind.encode()


REFERENCE = Number("R")
ALLELE = Number("A")
GENOTYPE = Number("G")
ZERO = Number("0")
UNKNOWN = Number(".")


@dataclass(frozen=True)
class ValueType(object):
    kind: str
    raw: bytes = None

    @classmethod
    def other(cls, raw):
        return cls(OTHER, raw=as_bytes(raw))

    def __bytes__(self):
        if self.kind == OTHER:
            return self.raw
        return self.kind.encode()


STRING = ValueType("String")
INTEGER = ValueType("Integer")
FLAG = ValueType("Flag")
CHARACTER = ValueType("Character")
FLOAT = ValueType("Float")


@dataclass(frozen=True)
class VCFVersion(object):
    kind: str
    raw: bytes = None

    @classmethod
    def other(cls, raw):
        return cls(OTHER, raw=as_bytes(raw))

    def __bytes__(self):
        if self.kind == OTHER:
            return self.raw
        return self.kind.encode()


VCF4_0 = VCFVersion("VCFv4.0")
VCF4_1 = VCFVersion("VCFv4.1")
VCF4_2 = VCFVersion("VCFv4.2")
VCF4_3 = VCFVersion("VCFv4.3")
VCF4_4 = VCFVersion("VCFv4.4")

# token lookups for the well known variants
NUMBERS = {bytes(n): n for n in (REFERENCE, ALLELE, GENOTYPE, ZERO, UNKNOWN)}
VALUE_TYPES = {bytes(t): t for t in (STRING, INTEGER, FLAG, CHARACTER, FLOAT)}
VERSIONS = {bytes(v): v for v in (VCF4_0, VCF4_1, VCF4_2, VCF4_3, VCF4_4)}


def _quote(value):
    return b'"' + value + b'"'


@dataclass(frozen=True)
class FileFormat(object):
    version: VCFVersion

    def __bytes__(self):
        return b"##fileformat=" + bytes(self.version)


@dataclass(frozen=True)
class InfoField(object):
    id: bytes
    number: Number
    type: ValueType
    description: bytes
    source: bytes = None
    version: bytes = None

    _tag = b"INFO"

    def __post_init__(self):
        _coerce(self, "id", "description", "source", "version")

    def __bytes__(self):
        entries = [
            b"ID=" + self.id,
            b"Number=" + bytes(self.number),
            b"Type=" + bytes(self.type),
            b"Description=" + _quote(self.description),
        ]
        if self.source is not None:
            entries.append(b"Source=" + _quote(self.source))
        if self.version is not None:
            entries.append(b"Version=" + _quote(self.version))
        return b"##%s=<%s>" % (self._tag, b",".join(entries))


@dataclass(frozen=True)
class FormatField(InfoField):
    _tag = b"FORMAT"


@dataclass(frozen=True)
class FilterField(object):
    id: bytes
    description: bytes

    _tag = b"FILTER"

    def __post_init__(self):
        _coerce(self, "id", "description")

    def __bytes__(self):
        return b'##%s=<ID=%s,Description="%s">' % (
            self._tag,
            self.id,
            self.description,
        )


@dataclass(frozen=True)
class AltField(FilterField):
    _tag = b"ALT"


@dataclass(frozen=True)
class ContigField(object):
    id: bytes
    length: int = None

    def __post_init__(self):
        _coerce(self, "id")

    def __bytes__(self):
        if self.length is None:
            return b"##contig=<ID=%s>" % self.id
        return b"##contig=<ID=%s,length=%d>" % (self.id, self.length)


@dataclass(frozen=True)
class OtherField(object):
    key: bytes
    value: bytes = None

    def __post_init__(self):
        _coerce(self, "key", "value")

    def __bytes__(self):
        if self.value is None:
            return b"##" + self.key
        return b"##" + self.key + b"=" + self.value


def fileformat(version=VCF4_3):
    if not isinstance(version, VCFVersion):
        raw = as_bytes(version)
        version = VERSIONS.get(raw) or VCFVersion.other(raw)
    return FileFormat(version)


def source(source=None):
    if source is None:
        source = "vcfio v{}".format(version.__version__)
    return OtherField("source", source)


def commandline(command):
    if not isinstance(command, str):
        command = '"{}"'.format(" ".join(command))
    return OtherField("commandline", command)


# standard reserved FILTER
PASS = FilterField("PASS", "All filters passed")


def columns(samples):
    """Column header line (without terminator) for a list of samples."""
    cols = [
        b"#CHROM",
        b"POS",
        b"ID",
        b"REF",
        b"ALT",
        b"QUAL",
        b"FILTER",
        b"INFO",
    ]
    if samples:
        cols.append(b"FORMAT")
        cols += [as_bytes(s) for s in samples]
    return b"\t".join(cols)
