"""Tagged success/error results returned by every hubIC operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

from hubix.auth.models.errors import AuthenticationFailed, AuthError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_success(self) -> bool:
        return True

    def is_error(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    error: AuthError

    def is_success(self) -> bool:
        return False

    def is_error(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        """Raise the wrapped error as ``AuthenticationFailed``."""
        raise AuthenticationFailed(self.error)


Result = Union[Ok[T], Err]
