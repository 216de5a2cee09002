from http import HTTPStatus


class AO3Exception(Exception):
    """
    Base class for all AO3 exceptions

    Attributes:
        code (int): HTTP-like status classifying the failure
        errors (list[Exception]): Underlying errors, if any
    """

    code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message, errors=None, code=None):
        super().__init__(message)
        self.errors = errors if errors is not None else []
        if code is not None:
            self.code = code


class ServiceUnavailable(AO3Exception):
    """
    Raised when AO3 cannot be reached at all.
    """

    code = HTTPStatus.SERVICE_UNAVAILABLE


class FailedRequest(AO3Exception):
    """
    Raised when AO3 answers with a non-success status code.
    """

    code = HTTPStatus.BAD_GATEWAY


class RateLimitError(FailedRequest):
    """
    Raised when AO3 answers with a rate limiting status code.
    """

    code = HTTPStatus.TOO_MANY_REQUESTS


class FailedDownload(AO3Exception):
    """
    Raised when a download fails.
    """


class InvalidConfiguration(AO3Exception):
    """
    Raised when the client is given a setting it cannot use.
    """

    code = HTTPStatus.NOT_IMPLEMENTED


class ParseError(AO3Exception):
    """
    Base class for errors raised while reading an AO3 page.
    """

    code = HTTPStatus.UNPROCESSABLE_ENTITY


class DocumentParseError(ParseError):
    """
    Raised when a page cannot be parsed as HTML.
    """


class ExtractionError(ParseError):
    """
    Raised when a page does not have the expected shape.

    Attributes:
        field (str): Name of the field being extracted
        raw (str | None): Raw text that failed to extract, if any
    """

    def __init__(self, message, field, raw=None, errors=None):
        if raw is not None:
            message = f"{message}: {raw!r}"
        super().__init__(message, errors=errors)
        self.field = field
        self.raw = raw


class NodeCountError(ExtractionError):
    """
    Raised when a selector matches the wrong number of nodes.
    """


class MissingAttributeError(ExtractionError):
    """
    Raised when a node is missing an expected attribute.
    """


class PatternMismatchError(ExtractionError):
    """
    Raised when a value does not match its expected pattern.
    """


class ConversionError(ExtractionError):
    """
    Raised when numeric text cannot be converted to an integer.
    """
