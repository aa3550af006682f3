from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ..errors import DotfilesError
from .command import DEFAULT_TIMEOUT_S, run_cmd

logger = logging.getLogger(__name__)

INSTALL_SCRIPT = "install.sh"


def backup_existing(dotfiles_dir: str | Path, *, dry_run: bool = False) -> Optional[Path]:
    """Move an existing checkout aside to `<dir>.bak`.

    Returns the backup path, or None when there was nothing to move.
    """

    d = Path(dotfiles_dir)
    if not d.exists():
        return None

    backup = d.with_name(d.name + ".bak")
    if backup.exists():
        raise DotfilesError(f"Dotfiles backup already exists: {backup} (remove it and re-run)")

    logger.warning("Dotfiles directory already exists. Backing up...")
    if dry_run:
        logger.info("Would move %s -> %s", d, backup)
        return backup

    d.rename(backup)
    return backup


def clone_repo(
    repo_url: str,
    dest: str | Path,
    *,
    timeout: float | None = DEFAULT_TIMEOUT_S,
    dry_run: bool = False,
) -> None:
    logger.debug("Cloning dotfiles from: %s", repo_url)
    run_cmd(["git", "clone", repo_url, str(dest)], capture=False, timeout=timeout, dry_run=dry_run)


def run_install_script(
    dotfiles_dir: str | Path,
    *,
    timeout: float | None = DEFAULT_TIMEOUT_S,
    dry_run: bool = False,
) -> bool:
    """Run `<dir>/install.sh` with bash if present. Returns whether it ran."""

    script = Path(dotfiles_dir) / INSTALL_SCRIPT
    if not script.is_file():
        logger.warning("No %s found in dotfiles repository", INSTALL_SCRIPT)
        return False

    logger.info("Running dotfiles install script...")
    run_cmd(["bash", str(script)], capture=False, timeout=timeout, dry_run=dry_run)
    return True
