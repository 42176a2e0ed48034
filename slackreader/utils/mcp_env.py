"""MCP-related environment helpers.

Centralizes small pieces of environment logic so the CLI, the server and the
logging setup share consistent behavior.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

_TRUTHY = ("1", "true", "yes", "on")


def env_true(name: str, environ: Mapping[str, str] | None = None) -> bool:
    """Return True when ``name`` is set to a truthy value (1/true/yes/on)."""
    env = os.environ if environ is None else environ
    raw = env.get(name, "")
    return str(raw).strip().lower() in _TRUTHY


def debug_enabled(environ: Mapping[str, str] | None = None) -> bool:
    """Return True when SLACKREADER_DEBUG is truthy."""
    return env_true("SLACKREADER_DEBUG", environ)
