from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

from .errors import HelpfulUserError, InputError


@dataclass
class Config:
    transform: Optional[str] = None
    debug: bool = False
    rich: bool = True

    @staticmethod
    def from_dict(data: Any) -> Config:
        if not isinstance(data, dict):
            raise InputError("a table of settings", data)
        known = {f.name for f in fields(Config)}
        for key in data:
            if key not in known:
                raise HelpfulUserError(
                    f"Unknown setting `{key}`, expected one of: {', '.join(sorted(known))}."
                )
        transform = data.get("transform")
        if transform is not None and not isinstance(transform, str):
            raise InputError("`transform` to be a `module:attr` string", transform)
        for key in ("debug", "rich"):
            if key in data and not isinstance(data[key], bool):
                raise InputError(f"`{key}` to be a boolean", data[key])
        return Config(**data)


def read_config(path: Path, section: Optional[str] = None) -> Config:
    """Read a `Config` from the TOML or JSON file at `path`. If `section` is
    given, only that section is decoded; it may contain periods to indicate
    deeper nesting.

    ```python
    read_config(Path("./pyproject.toml"), "tool.tryresult")
    ```
    """
    if not path.exists():
        raise HelpfulUserError(f"File not found: {path}")
    with open(path, "rb") as f:
        if path.suffix == ".toml":
            data: Any = tomllib.load(f)
        elif path.suffix == ".json":
            data = json.load(f)
        else:
            raise HelpfulUserError(f"Unrecognized file format: {path}")

    try:
        if section is not None:
            for s in section.split("."):
                data = data[s]
    except KeyError as e:
        raise HelpfulUserError(
            f"Data file `{path}` should contain section `{section}`."
        ) from e

    return Config.from_dict(data)


def find_config(cwd: Path = Path(".")) -> Config:
    """Look for `tryresult.toml`, then for a `[tool.tryresult]` section in
    `pyproject.toml`. Without either, defaults are used."""
    if (cwd / "tryresult.toml").exists():
        return read_config(cwd / "tryresult.toml")

    pyproject = cwd / "pyproject.toml"
    if pyproject.exists():
        with open(pyproject, "rb") as f_in:
            data = tomllib.load(f_in)
        tool = data.get("tool", {})
        if not isinstance(tool, dict):
            raise InputError("`tool` in `pyproject.toml` to be a table", tool)
        if "tryresult" in tool:
            return Config.from_dict(tool["tryresult"])

    return Config()
