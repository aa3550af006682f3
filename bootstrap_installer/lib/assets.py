from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


def copy_overrides(src: str | Path, dst: str | Path, *, dry_run: bool = False) -> List[str]:
    """Copy everything inside `src` into `dst`, replacing files of the same name.

    Returns the top-level names that were copied.
    """

    s = Path(src)
    d = Path(dst)
    if not s.is_dir():
        logger.error("Config directory not found: %s", s)
        raise FileNotFoundError(str(s))

    names = sorted(child.name for child in s.iterdir())
    if dry_run:
        logger.info("Would copy %s -> %s (%s)", s, d, ", ".join(names) or "empty")
        return names

    d.mkdir(parents=True, exist_ok=True)
    for item in s.rglob("*"):
        out = d / item.relative_to(s)
        if item.is_dir():
            out.mkdir(parents=True, exist_ok=True)
        else:
            out.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(item, out)

    logger.debug("Copied overrides from %s: %s", s, names)
    return names
