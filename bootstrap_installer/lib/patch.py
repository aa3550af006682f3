from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path

from ..errors import BootstrapError

logger = logging.getLogger(__name__)


class PatchError(BootstrapError):
    pass


def backup_path_for(path: str | Path) -> Path:
    p = Path(path)
    return p.with_name(p.name + ".bak")


def _substitute_lines(text: str, regex: re.Pattern[str], replacement: str) -> tuple[str, int]:
    """sed `s/pat/repl/` semantics: first match on every line, literal replacement."""

    changed = 0
    out: list[str] = []
    for line in text.splitlines(keepends=True):
        body = line.rstrip("\n")
        new_body, n = regex.subn(lambda _m: replacement, body, count=1)
        changed += n
        out.append(new_body + line[len(body):])
    return "".join(out), changed


def modify_line_in_file(
    path: str | Path,
    search_pattern: str,
    replacement: str,
    *,
    verbose: bool = False,
) -> None:
    """Replace `search_pattern` with `replacement` in a file, in place.

    The original is copied to `<path>.bak` first. If the substitution fails
    the backup is moved back over the file and PatchError is raised. The
    backup is left behind on success.
    """

    p = Path(path)
    if not p.is_file():
        logger.error("File not found: %s", p)
        raise FileNotFoundError(str(p))

    logger.debug("Modifying file: %s", p)
    logger.debug("Search pattern: %s", search_pattern)
    logger.debug("Replacement: %s", replacement)

    backup = backup_path_for(p)
    shutil.copy2(p, backup)

    try:
        regex = re.compile(search_pattern)
        original = p.read_text(encoding="utf-8")
        updated, changed = _substitute_lines(original, regex, replacement)
        p.write_text(updated, encoding="utf-8")
    except (re.error, OSError, UnicodeDecodeError) as e:
        logger.error("Failed to modify file: %s", p)
        shutil.move(str(backup), str(p))
        raise PatchError(f"Failed to modify {p}: {e}") from e

    if not changed:
        logger.warning("Pattern %r matched nothing in %s", search_pattern, p)

    if verbose:
        logger.debug("Changed line now reads as:")
        for line in updated.splitlines():
            if replacement in line:
                logger.debug("%s", line)
