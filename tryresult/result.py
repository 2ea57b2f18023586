from collections.abc import Coroutine
from dataclasses import dataclass, field
from typing import Any, Generic, Literal, TypeVar, overload

from .errors import ArgumentShapeError, InputError
from .utility import capture_traceback


D = TypeVar("D")
E = TypeVar("E", bound=BaseException)


@dataclass(frozen=True)
class Ok(Generic[D]):
    value: D
    ok: Literal[True] = field(default=True, init=False)
    error: None = field(default=None, init=False, repr=False)

    def __bool__(self):
        return True


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E
    ok: Literal[False] = field(default=False, init=False)
    value: None = field(default=None, init=False, repr=False)

    def __post_init__(self):
        if not isinstance(self.error, BaseException):
            raise InputError("an exception", self.error)

    def __bool__(self):
        return False


Result = Ok[D] | Err[E]
DeferredResult = Coroutine[Any, Any, Result[D, E]]


def ok(value: D = None) -> Ok[D]:  # type: ignore[assignment]
    return Ok(value)


@overload
def err(error: str, /) -> Err[Exception]: ...
@overload
def err(error: E, /) -> Err[E]: ...
@overload
def err(error: type[E], /, *args: Any, **kwargs: Any) -> Err[E]: ...
def err(error, /, *args, **kwargs):
    """Create an `Err` from one of three shapes:

    - a message string, wrapped in a plain `Exception`;
    - an exception instance, wrapped as is;
    - an exception class, called with the remaining arguments.

    Exceptions created here get a traceback pointing at the caller. Any
    other argument raises `ArgumentShapeError`.
    """
    if isinstance(error, str):
        return Err(capture_traceback(Exception(error), skip=1))
    if isinstance(error, BaseException):
        return Err(error)
    if isinstance(error, type) and issubclass(error, BaseException):
        return Err(capture_traceback(error(*args, **kwargs), skip=1))
    raise ArgumentShapeError()
