from argparse import ArgumentParser
from pathlib import Path
import asyncio
import importlib
import inspect
import re
import sys
from typing import Any, Optional

import argh  # type: ignore
from rich.console import Console
from rich.pretty import Pretty
from rich.traceback import Traceback
from rich_argparse import RichHelpFormatter

from .catch import try_catch
from .config import Config, find_config, read_config
from .errors import HelpfulUserError, InputError, UserError
from .logging import logger, configure_logger
from .result import Result
from .version import __version__

log = logger()


def load_object(ref: str) -> Any:
    """Resolve a `package.module:attr.path` reference."""
    if m := re.fullmatch(r"([\w.]+):([\w.]+)", ref):
        module_name, attr_path = m.group(1), m.group(2)
    else:
        raise InputError("a reference of the form `module:attr`", ref)

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise HelpfulUserError(f"Could not import module `{module_name}`: {e}") from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise HelpfulUserError(f"`{module_name}` has no attribute `{attr_path}`.") from e

    if not callable(obj):
        raise InputError(f"`{ref}` to be callable", obj)
    return obj


def run_target(target: str, transform: Optional[str] = None) -> Result[Any, BaseException]:
    expression = load_object(target)
    if transform is None:
        result = try_catch(expression)
    else:
        result = try_catch(expression, load_object(transform))

    if inspect.iscoroutine(result):
        log.debug(f"awaiting deferred result of `{target}`")
        return asyncio.run(result)
    return result


def load_config(config_file: Optional[str]) -> Config:
    if config_file is None:
        return find_config()
    if m := re.match(r"([^\[\]]+)\[([^\[\]\s]+)\]", config_file):
        return read_config(Path(m.group(1)), m.group(2))
    return read_config(Path(config_file))


@argh.arg("target", nargs="?", help="zero-argument callable to run, as `module:attr`")
@argh.arg("-t", "--transform", help="error transformer to apply, as `module:attr`")
@argh.arg(
    "-c",
    "--config",
    help="TOML or JSON settings file, use a `[...]` suffix to indicate a subsection.",
)
@argh.arg("--plain", help="log without rich formatting")
@argh.arg("--debug", help="more verbose logging")
@argh.arg("-v", "--version", help="print version number and exit")
def tryresult(
    target: Optional[str],
    *,
    transform: Optional[str] = None,
    config: Optional[str] = None,
    plain: bool = False,
    debug: bool = False,
    version: bool = False,
):
    """Run a callable and report its outcome as a result."""
    if version:
        print(f"tryresult {__version__}")
        sys.exit(0)

    try:
        settings = load_config(config)
        configure_logger(debug or settings.debug, settings.rich and not plain)
        if target is None:
            raise HelpfulUserError("No target given, expected a `module:attr` reference.")
        result = run_target(target, transform or settings.transform)
    except UserError as e:
        log.error(f"Failed: {e}")
        sys.exit(2)

    if result:
        Console().print(Pretty(result.value))
    else:
        e = result.error
        Console(stderr=True).print(Traceback.from_exception(type(e), e, e.__traceback__))
        sys.exit(1)


def cli():
    parser = ArgumentParser(formatter_class=RichHelpFormatter)
    argh.set_default_command(parser, tryresult)
    argh.dispatch(parser)


if __name__ == "__main__":
    cli()
