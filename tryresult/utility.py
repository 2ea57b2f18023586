import sys
import types
from typing import TypeVar


E = TypeVar("E", bound=BaseException)


def capture_traceback(error: E, skip: int = 0) -> E:
    """Give `error` a traceback pointing at the live call stack, as if it
    had been raised there. `skip` counts frames above the caller to leave
    out. Errors that were already raised keep their traceback."""
    if error.__traceback__ is not None:
        return error

    tb = None
    frame = sys._getframe(skip + 1)
    while frame is not None:
        tb = types.TracebackType(tb, frame, frame.f_lasti, frame.f_lineno)
        frame = frame.f_back
    return error.with_traceback(tb)
