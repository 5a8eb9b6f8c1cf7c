# bgg_client/exceptions.py
from typing import Optional


class BGGException(Exception):
    """Base exception for all bgg-client errors."""
    kind = "BGGException"

    def __init__(self, message: str, raw: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.raw = raw


class BGGConstructionError(BGGException, ValueError):
    """Raised synchronously when a request is built with invalid arguments."""
    kind = "ConstructionError"


class BGGClientClosedError(BGGException):
    """Raised when a call is submitted to a client that has been closed."""
    kind = "ClientClosed"


class BGGTransportError(BGGException):
    """Raised when a document could not be retrieved from the service."""
    kind = "TransportError"


class BGGNetworkError(BGGTransportError):
    """Raised for network-related issues (e.g., connection errors, timeouts)."""
    pass


class BGGAPIError(BGGTransportError):
    """Raised for error statuses returned by the BGG API, or when retries run out."""
    pass


class BGGMappingError(BGGException):
    """Raised when a document cannot be mapped onto the domain records."""
    kind = "MappingError"


class BGGSchemaMismatchError(BGGMappingError):
    """The document is not XML or its root does not belong to the requested endpoint."""
    kind = "SchemaMismatch"


class BGGMissingFieldError(BGGMappingError):
    """A required attribute or child element is absent."""
    kind = "MissingField"

    def __init__(self, field: str, element: str, raw: Optional[str] = None):
        super().__init__(f"Required field '{field}' missing on <{element}>", raw)
        self.field = field
        self.element = element


class BGGTypeMismatchError(BGGMappingError):
    """A value cannot be converted to the type its field expects."""
    kind = "TypeMismatch"

    def __init__(self, field: str, value: str, expected: str, raw: Optional[str] = None):
        super().__init__(f"Field '{field}' has value '{value}', expected {expected}", raw)
        self.field = field
        self.value = value
        self.expected = expected


class BGGUnknownEnumValueError(BGGMappingError):
    """A value is not one of the enumeration's members and strict enums are on."""
    kind = "UnknownEnumValue"

    def __init__(self, enum_name: str, value: str, raw: Optional[str] = None):
        super().__init__(f"Unknown {enum_name} value '{value}'", raw)
        self.enum_name = enum_name
        self.value = value


class BGGPaginationAbortedError(BGGException):
    """
    Raised when a page after the first one fails. The pages fetched before the
    failure are discarded; the original error is available as `cause`.
    """
    kind = "PaginationAborted"

    def __init__(self, page: int, cause: BGGException):
        super().__init__(f"Pagination aborted at page {page}: {cause.message}", cause.raw)
        self.page = page
        self.cause = cause


class BGGCallbackError(BGGException):
    """Raised by the completion callback of an asynchronous call."""
    kind = "CallbackError"
