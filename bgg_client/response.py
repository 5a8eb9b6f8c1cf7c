# bgg_client/response.py
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from .exceptions import BGGException

T = TypeVar("T")


@dataclass(frozen=True)
class Response(Generic[T]):
    """
    The outcome of a call: exactly one of `data` and `error` is set.

    Errors that happen after a request was submitted (transport failures,
    documents that cannot be mapped, aborted pagination) end up in `error`
    instead of being raised, so a submitted call always resolves.
    """
    data: Optional[T] = None
    error: Optional[BGGException] = None

    def __post_init__(self):
        if (self.data is None) == (self.error is None):
            raise ValueError("A Response holds exactly one of data or error.")

    @classmethod
    def success(cls, data: T) -> "Response[T]":
        return cls(data=data)

    @classmethod
    def failure(cls, error: BGGException) -> "Response[Any]":
        return cls(error=error)

    def is_success(self) -> bool:
        return self.error is None

    def is_error(self) -> bool:
        return self.error is not None

    @property
    def raw(self) -> Optional[str]:
        """The offending document text of an error response, if there was one."""
        return self.error.raw if self.error is not None else None
