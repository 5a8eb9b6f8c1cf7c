"""A Pythonic, asynchronous client for the BoardGameGeek (BGG) XML APIs."""
import logging

from .client import BGGClient
from .exceptions import (
    BGGAPIError,
    BGGCallbackError,
    BGGClientClosedError,
    BGGConstructionError,
    BGGException,
    BGGMappingError,
    BGGMissingFieldError,
    BGGNetworkError,
    BGGPaginationAbortedError,
    BGGSchemaMismatchError,
    BGGTransportError,
    BGGTypeMismatchError,
    BGGUnknownEnumValueError,
)
from .mapper import Mapper
from .request import Call, Request
from .response import Response
from .transport import HttpTransport, ReplayTransport, Transport
from .types import (
    Domain,
    Endpoint,
    FamilyType,
    ForumListType,
    HotListType,
    Inclusion,
    PlayThingType,
    SitemapLocationType,
    SubType,
    ThingType,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())


def set_log_level(level):
    """Sets the verbosity of all bgg_client loggers, e.g. `set_log_level(logging.DEBUG)`."""
    logging.getLogger(__name__).setLevel(level)


__all__ = [
    "BGGClient",
    "Call",
    "Request",
    "Response",
    "Mapper",
    "Transport",
    "HttpTransport",
    "ReplayTransport",
    "Domain",
    "Endpoint",
    "FamilyType",
    "ForumListType",
    "HotListType",
    "Inclusion",
    "PlayThingType",
    "SitemapLocationType",
    "SubType",
    "ThingType",
    "BGGException",
    "BGGConstructionError",
    "BGGClientClosedError",
    "BGGTransportError",
    "BGGNetworkError",
    "BGGAPIError",
    "BGGMappingError",
    "BGGSchemaMismatchError",
    "BGGMissingFieldError",
    "BGGTypeMismatchError",
    "BGGUnknownEnumValueError",
    "BGGPaginationAbortedError",
    "BGGCallbackError",
    "set_log_level",
]
