from __future__ import annotations

import asyncio
import concurrent.futures
import inspect
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar, overload

from .errors import UnexpectedThrowError
from .logging import logger
from .result import DeferredResult, Err, Result, err, ok
from .utility import capture_traceback


D = TypeVar("D")
E = TypeVar("E", bound=BaseException)

log = logger()


def to_error(thrown: Any) -> BaseException:
    if isinstance(thrown, BaseException):
        return thrown
    return capture_traceback(UnexpectedThrowError(thrown), skip=1)


def _identity(e):
    return e


def _is_deferred(value: Any) -> bool:
    return inspect.isawaitable(value) or isinstance(value, concurrent.futures.Future)


def _failure(thrown: Any, transform: Callable[[BaseException], E]) -> Err[E]:
    error = to_error(thrown)
    log.debug("captured `%s`: %s", type(error).__name__, error)
    # exceptions raised by transform are not captured
    return err(transform(error))


async def _settle(deferred: Any, transform: Callable[[BaseException], E]) -> Result[Any, E]:
    if isinstance(deferred, concurrent.futures.Future):
        deferred = asyncio.wrap_future(deferred)
    try:
        value = await deferred
    except Exception as e:
        return _failure(e, transform)
    return ok(value)


@overload
def try_catch(
    expression: Callable[[], Awaitable[D]],
    transform: Callable[[BaseException], E] = ...,
) -> DeferredResult[D, E]: ...
@overload
def try_catch(
    expression: Callable[[], D],
    transform: Callable[[BaseException], E] = ...,
) -> Result[D, E]: ...
def try_catch(expression, transform=_identity):
    """Run `expression()` and return its outcome as a `Result`.

    If `expression` returns an awaitable (or a `concurrent.futures.Future`),
    a coroutine is returned instead; awaiting it gives the `Result` of the
    awaited value. Exceptions raised synchronously always give a plain
    `Err`, never a coroutine.

    Every captured exception is passed through `transform` before it is
    wrapped. A `transform` that raises is not captured again, which lets
    unforeseen errors propagate:

    ```python
    def only_offline(e):
        if isinstance(e, ConnectionError):
            return OfflineError()
        raise e

    result = await try_catch(lambda: client.fetch(url), only_offline)
    ```

    `expression` takes no arguments; bind them with a lambda or
    `functools.partial`. Only `Exception` is captured, so
    `KeyboardInterrupt`, `SystemExit` and `asyncio.CancelledError` pass
    through.
    """
    try:
        value = expression()
    except Exception as e:
        return _failure(e, transform)

    if _is_deferred(value):
        return _settle(value, transform)
    return ok(value)
