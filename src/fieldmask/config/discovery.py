"""Config file discovery.

Settings live either in a dedicated ``fieldmask.toml`` or in the
``[tool.fieldmask]`` table of a ``pyproject.toml``. The finder walks up
from the working directory, the way git finds .git/, and stops at the
first directory holding either file (``fieldmask.toml`` wins when both
are present). ``FIELDMASK_CONFIG`` overrides discovery entirely.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

CONFIG_FILENAME = "fieldmask.toml"
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TABLE = ("tool", "fieldmask")
CONFIG_ENV_VAR = "FIELDMASK_CONFIG"


def _has_tool_table(pyproject: Path) -> bool:
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError:
        return False
    return PYPROJECT_TABLE[1] in data.get(PYPROJECT_TABLE[0], {})


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest config file above *start* (default: cwd), or None.

    A ``pyproject.toml`` only counts when it has a ``[tool.fieldmask]`` table.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        pyproject = directory / PYPROJECT_FILENAME
        if pyproject.is_file() and _has_tool_table(pyproject):
            return pyproject
    return None
