import numpy as np

from vcfio.errors import VCFEncodingError

__all__ = [
    "as_bytes",
    "text",
    "format_quality",
    "vcfbytes",
    "vcfvalues",
]


def as_bytes(value):
    """Coerce a key or value to bytes, encoding str as UTF-8."""
    if isinstance(value, bytes):
        return value
    elif isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def text(value):
    """Interpret raw VCF bytes as UTF-8 text.

    Parameters
    ----------
    value : bytes
        Raw bytes.

    Returns
    -------
    string : str
        Decoded text.

    Raises
    ------
    VCFEncodingError
        If the bytes are not valid UTF-8.
    """
    try:
        return value.decode("utf-8")
    except UnicodeDecodeError as e:
        raise VCFEncodingError(value) from e


def format_quality(quality):
    """Format a QUAL value as written by common VCF producers.

    Parameters
    ----------
    quality : float
        Phred-scaled quality or None.

    Returns
    -------
    string : bytes
        ``.`` if missing, an integral value with a single decimal
        place (e.g. ``20.0``) or the shortest positional representation
        of a fractional value (e.g. ``25743.5``).
    """
    if quality is None or np.isnan(quality):
        return b"."
    if np.abs(np.rint(quality) - quality) < 1e-8:
        return b"%.1f" % quality
    return np.format_float_positional(quality, trim="-").encode()


def vcfbytes(obj, precision=3):
    """Format a single scalar as a VCF value.

    Parameters
    ----------
    obj : object
        Scalar value, None and NaN are treated as missing.
    precision : int
        Decimal places floats are rounded to.

    Returns
    -------
    value : bytes
        VCF value.
    """
    if obj is None:
        return b"."
    elif isinstance(obj, (bytes, str)):
        if obj:
            return as_bytes(obj)
        else:
            return b"."
    elif isinstance(obj, (float, np.floating)):
        if np.isnan(obj):
            return b"."
        obj = np.round(obj, precision)
        i = int(obj)
        if i == obj:
            return str(i).encode()
        else:
            return str(float(obj)).encode()
    else:
        return str(obj).encode()


def vcfvalues(obj, precision=3):
    """Convert an object into a list of VCF values suitable for the
    record mutators.

    Parameters
    ----------
    obj : object
        A scalar, a sequence of scalars or a numpy array.
    precision : int
        Decimal places floats are rounded to.

    Returns
    -------
    values : list
        List of bytes, empty if obj is None.
    """
    if obj is None:
        return []
    elif isinstance(obj, (bytes, str)):
        return [vcfbytes(obj, precision=precision)]
    elif isinstance(obj, np.ndarray):
        return [vcfbytes(o, precision=precision) for o in obj.ravel().tolist()]
    elif hasattr(obj, "__iter__"):
        return [vcfbytes(o, precision=precision) for o in obj]
    return [vcfbytes(obj, precision=precision)]
