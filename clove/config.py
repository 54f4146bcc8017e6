from __future__ import annotations
import os
from pathlib import Path
from typing import Iterable, List, Optional


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Defaults
_DEFAULT_RECURSION_LIMIT = 10_000
_DEFAULT_LOG_LEVEL = 'WARNING'


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def get_prelude_paths() -> List[Path]:
    """Files evaluated into every new session, in order. Empty by default."""
    return paths_from_env('CLOVE_PRELUDE_PATH', [])


def get_eval_timeout() -> Optional[float]:
    """Seconds allowed for one top-level evaluation; None disables the limit."""
    raw = os.environ.get('CLOVE_EVAL_TIMEOUT')
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"CLOVE_EVAL_TIMEOUT must be a number of seconds, got {raw!r}")
    return timeout if timeout > 0 else None


def get_recursion_limit() -> int:
    raw = os.environ.get('CLOVE_RECURSION_LIMIT')
    if not raw:
        return _DEFAULT_RECURSION_LIMIT
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"CLOVE_RECURSION_LIMIT must be an integer, got {raw!r}")


def get_log_level() -> str:
    return os.environ.get('CLOVE_LOG_LEVEL', _DEFAULT_LOG_LEVEL).upper()
