from dataclasses import dataclass
from typing import Any


class UserError(Exception):
    def __str__(self):
        return "Unknown user error."


@dataclass(eq=False)
class HelpfulUserError(UserError):
    msg: str

    def __str__(self):
        return self.msg


class ArgumentShapeError(HelpfulUserError, TypeError):
    def __init__(self):
        super().__init__("err expects a string, Error, or Error class as an argument")


@dataclass(eq=False)
class InputError(UserError):
    expected: str
    got: Any

    def __str__(self):
        return f"Expected {self.expected}, got: {self.got!r}"


@dataclass(eq=False)
class UnexpectedThrowError(Exception):
    """Stands in for a raised value that is not an exception."""
    value: Any

    def __post_init__(self):
        Exception.__init__(
            self,
            f"Unexpected throw value '{self.value}' of type {type(self.value).__name__}",
        )
