"""Custom exceptions for edn-py."""


class EdnPyError(Exception):
    """Base exception for edn-py."""


class EDNParseError(EdnPyError):
    """EDN parsing errors."""


class EDNStructureError(EDNParseError):
    """Mismatched, unterminated or dangling collection structure."""


class EDNTagError(EDNParseError):
    """Tag marker with no value, two tags in a row, or a tag on a number."""


class EDNLiteralError(EDNParseError):
    """Malformed literal or input that matches no known form."""


class EDNSerializeError(EdnPyError):
    """EDN serialization errors."""
