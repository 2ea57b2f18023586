import logging
import sys
from rich.console import Console
from rich.highlighter import RegexHighlighter
from rich.logging import RichHandler


def logger():
    return logging.getLogger("tryresult")


class ReferenceHighlighter(RegexHighlighter):
    """Bold for back-ticked names, cyan for `module:attr` references."""
    highlights = [
        r"`(?P<bold>[^`]*)`",
        r"(?P<cyan>\b[\w.]+:[\w.]+\b)",
    ]


def _handler(debug: bool, rich: bool) -> logging.Handler:
    if not rich:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        return handler

    # stdout carries the printed payload, so log lines go to stderr
    return RichHandler(
        console=Console(stderr=True),
        show_path=debug,
        highlighter=ReferenceHighlighter(),
        log_time_format="[%X]",
    )


def configure_logger(debug: bool, rich: bool = True):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        handlers=[_handler(debug, rich)],
    )
