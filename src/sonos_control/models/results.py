from dataclasses import dataclass
from typing import Optional, Union

from .errors import SonosError


@dataclass(frozen=True)
class Success:
    """A completed request. ``payload`` is the raw response body, ``None`` if empty."""

    payload: Optional[bytes]
    status_code: int = 200

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> Optional[bytes]:
        return self.payload


@dataclass(frozen=True)
class Failure:
    """A failed request carrying the error that ended it."""

    error: SonosError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Optional[bytes]:
        raise self.error


Result = Union[Success, Failure]
