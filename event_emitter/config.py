"""Library-wide emitter defaults.

The only tunable today is the default leak warning threshold handed to
every new emitter. It can be set programmatically, read from the
`[tool.event_emitter]` table of a TOML file (usually `pyproject.toml`), or
overridden with the `EVENT_EMITTER_MAX_HANDLERS` environment variable.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # type: ignore

logger = logging.getLogger("event_emitter.config")

DEFAULT_MAX_HANDLERS = 10
ENV_MAX_HANDLERS = "EVENT_EMITTER_MAX_HANDLERS"
TOOL_TABLE = "event_emitter"

_default_max_handlers = DEFAULT_MAX_HANDLERS


@dataclass
class EmitterConfig:
    max_handlers: int = DEFAULT_MAX_HANDLERS


def get_default_max_handlers() -> int:
    """Return the threshold new emitters start with."""
    return _default_max_handlers


def set_default_max_handlers(n: int) -> None:
    """Set the threshold new emitters start with.

    Existing emitters keep their current value.

    Parameters:
        n (int): New default; 0 disables the leak warning.

    Raises:
        ValueError: If `n` is not a non-negative integer.
    """
    global _default_max_handlers
    if isinstance(n, bool) or not isinstance(n, int) or n < 0:
        raise ValueError("max handlers must be a non-negative integer")
    _default_max_handlers = n


def _coerce(value: Any, source: str) -> Optional[int]:
    n: Optional[int] = None
    if isinstance(value, bool):
        pass
    elif isinstance(value, int):
        n = value
    elif isinstance(value, float):
        if value.is_integer():
            n = int(value)
    elif isinstance(value, str):
        try:
            n = int(value.strip())
        except ValueError:
            pass
    if n is None:
        logger.warning("ignoring invalid max_handlers from %s: %r", source, value)
        return None
    if n < 0:
        logger.warning("ignoring negative max_handlers from %s: %r", source, value)
        return None
    return n


def load_config(path: Optional[Union[str, Path]] = None) -> EmitterConfig:
    """Load emitter settings from a TOML file and the environment.

    Parameters:
        path (Optional[Union[str, Path]]): TOML file to read. Defaults to
            `pyproject.toml` in the current directory, which may be absent.

    Returns:
        EmitterConfig: Settings with file and environment values applied.

    Raises:
        FileNotFoundError: If an explicit `path` does not exist.
    """
    cfg = EmitterConfig()
    candidate = Path(path) if path is not None else Path.cwd() / "pyproject.toml"
    if not candidate.exists():
        if path is not None:
            raise FileNotFoundError(f"Configuration file not found: {candidate}")
    else:
        data: Dict[str, Any] = {}
        try:
            with open(candidate, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.warning("failed to parse %s, using defaults: %s", candidate, e)
        tool = data.get("tool")
        table = tool.get(TOOL_TABLE) if isinstance(tool, dict) else None
        if isinstance(table, dict) and "max_handlers" in table:
            n = _coerce(table["max_handlers"], str(candidate))
            if n is not None:
                cfg.max_handlers = n

    env = os.environ.get(ENV_MAX_HANDLERS)
    if env:
        n = _coerce(env, ENV_MAX_HANDLERS)
        if n is not None:
            cfg.max_handlers = n
    return cfg


def configure(path: Optional[Union[str, Path]] = None) -> EmitterConfig:
    """Load settings and install them as the process-wide defaults."""
    cfg = load_config(path)
    set_default_max_handlers(cfg.max_handlers)
    return cfg
