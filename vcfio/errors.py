HEADER_PARSE_ERROR = "Failed to parse header at line: {line_number}"
RECORD_PARSE_ERROR = "Failed to parse record at line: {line_number}"
IO_ERROR = "I/O error at line: {line_number}"
ENCODING_ERROR = "Value is not valid UTF-8: {value!r}"


class VCFError(Exception):
    pass


class ParseError(VCFError, ValueError):
    """Grammar failure within a single line.

    Parameters
    ----------
    message : str
        Description of the failure.
    offset : int
        Byte offset within the line at which parsing failed.
    """

    def __init__(self, message, offset=0):
        super().__init__("{} (offset {})".format(message, offset))
        self.offset = offset


class HeaderParseError(VCFError):
    def __init__(self, line_number=None, message=None):
        if message is None:
            message = HEADER_PARSE_ERROR.format(line_number=line_number)
        super().__init__(message)
        self.line_number = line_number


class RecordParseError(VCFError):
    def __init__(self, line_number=None, message=None):
        if message is None:
            message = RECORD_PARSE_ERROR.format(line_number=line_number)
        super().__init__(message)
        self.line_number = line_number


class VCFIOError(VCFError):
    def __init__(self, line_number=None):
        super().__init__(IO_ERROR.format(line_number=line_number))
        self.line_number = line_number


class VCFEncodingError(VCFError):
    def __init__(self, value):
        super().__init__(ENCODING_ERROR.format(value=value))
        self.value = value
