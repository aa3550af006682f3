from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)

OS_RELEASE_PATH = "/etc/os-release"


def parse_os_release(text: str) -> Dict[str, str]:
    """Parse the shell-style KEY=value lines of os-release(5)."""

    out: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        try:
            parts = shlex.split(value)
        except ValueError:
            # Unbalanced quotes: keep the raw value minus stray quote chars.
            parts = [value.strip().strip("\"'")]
        out[key.strip()] = parts[0] if parts else ""
    return out


def read_os_release(path: str | Path = OS_RELEASE_PATH) -> Dict[str, str]:
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(str(p))
    data = parse_os_release(p.read_text(encoding="utf-8", errors="ignore"))
    logger.debug("os-release %s: ID=%s VERSION_ID=%s", p, data.get("ID"), data.get("VERSION_ID"))
    return data
