from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import List


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Defaults
_DEFAULT_PROMPT = 'lispy> '
_DEFAULT_LOG_LEVEL = 'WARNING'


def paths_from_env(var: str) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return []
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def get_prelude_paths() -> List[Path]:
    """Files of Lispy source evaluated into every new interpreter, in order."""
    return paths_from_env('LISPY_PRELUDE_PATH')


def get_prompt() -> str:
    return os.environ.get('LISPY_PROMPT', _DEFAULT_PROMPT)


def get_log_level() -> int:
    name = os.environ.get('LISPY_LOG_LEVEL', _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    # getLevelName returns "Level X" for unknown names
    return level if isinstance(level, int) else logging.WARNING


def color_enabled() -> bool:
    return os.environ.get('LISPY_COLOR', '1').strip() not in ('0', 'false', 'no')
