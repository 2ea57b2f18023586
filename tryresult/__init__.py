from .result import Ok, Err, Result, DeferredResult, ok, err
from .catch import try_catch, to_error
from .errors import ArgumentShapeError, UnexpectedThrowError
from .version import __version__

__all__ = [
    "Ok", "Err", "Result", "DeferredResult", "ok", "err", "try_catch", "to_error",
    "ArgumentShapeError", "UnexpectedThrowError", "__version__",
]
