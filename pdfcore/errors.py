"""Exception hierarchy for PDF parsing and object handling."""


class PdfError(Exception):
    """Base class of every error raised by this package."""


class EndOfFile(PdfError):
    """The input ended before the expected data was read."""

    def __init__(self, message="unexpected end of file"):
        super().__init__(message)


class UnexpectedPrimitive(PdfError):
    """A primitive of another kind was found than the one expected."""

    def __init__(self, expected, found):
        self.expected = expected
        self.found = found
        super().__init__(f"expected primitive {expected}, found {found}")


class MissingEntry(PdfError):
    """A required dictionary entry is absent."""

    def __init__(self, typ, field):
        self.typ = typ
        self.field = field
        super().__init__(f"missing entry {field!r} in {typ}")


class KeyValueMismatch(PdfError):
    """A dictionary entry holds a different name than required."""

    def __init__(self, key, value, found):
        self.key = key
        self.value = value
        self.found = found
        super().__init__(f"expected /{key} to be /{value}, found /{found}")


class UnexpectedLexeme(PdfError):
    """The lexer produced a token that does not fit at this position."""

    def __init__(self, pos, lexeme, expected):
        self.pos = pos
        self.lexeme = lexeme
        self.expected = expected
        super().__init__(
            f"unexpected lexeme {lexeme!r} at {pos}, expected {expected}"
        )


class PrimitiveNotAllowed(PdfError):
    """The parsed primitive kind is not among the allowed kinds."""

    def __init__(self, allowed, found):
        self.allowed = allowed
        self.found = found
        super().__init__(f"primitive not allowed: allowed {allowed!r}, found {found!r}")


class MaxDepthExceeded(PdfError):
    """Nesting of arrays or dictionaries is too deep."""

    def __init__(self, message="maximum nesting depth exceeded"):
        super().__init__(message)


class HexDecodeError(PdfError):
    """Invalid hexadecimal digits were encountered."""

    def __init__(self, pos, data):
        self.pos = pos
        self.data = bytes(data)
        super().__init__(f"invalid hex digits {self.data!r} at {pos}")


class UnknownType(PdfError):
    """The first lexeme does not start any known primitive."""

    def __init__(self, pos, first_lexeme, rest):
        self.pos = pos
        self.first_lexeme = first_lexeme
        self.rest = rest
        super().__init__(
            f"unknown type at {pos}: {first_lexeme!r} followed by {rest!r}"
        )


class NotFound(PdfError):
    """A searched word does not occur in the data."""

    def __init__(self, word):
        self.word = word
        super().__init__(f"could not find {word!r}")


class ParseError(PdfError):
    """A token could not be converted to the requested value."""


class DecodeError(PdfError):
    """Bytes could not be decoded as text."""


class XRefStreamTypeError(PdfError):
    """An xref stream entry has an unknown type field."""

    def __init__(self, found):
        self.found = found
        super().__init__(f"invalid xref stream entry type {found}")


class UnspecifiedXRefEntry(PdfError):
    """The xref table holds no entry for the requested object."""

    def __init__(self, id):
        self.id = id
        super().__init__(f"xref entry {id} is not specified")