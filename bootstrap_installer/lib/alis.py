"""Helpers around picodotdev/alis, the Arch Linux install script.

alis is downloaded into a working directory, ships one config file per
install profile (alis-<type>.conf, alis-packages-<type>.conf) and expects
the chosen pair to be named alis.conf / alis-packages.conf before
./alis.sh runs.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .command import DEFAULT_TIMEOUT_S, fetch_and_run_script, run_cmd
from .patch import modify_line_in_file

logger = logging.getLogger(__name__)

ALIS_DOWNLOAD_URL = "https://raw.githubusercontent.com/picodotdev/alis/main/download.sh"


def profile_config_name(install_type: str) -> str:
    return f"alis-{install_type}.conf"


def profile_packages_name(install_type: str) -> str:
    return f"alis-packages-{install_type}.conf"


def download_alis(
    work_dir: str | Path,
    *,
    url: str = ALIS_DOWNLOAD_URL,
    timeout: float | None = DEFAULT_TIMEOUT_S,
    dry_run: bool = False,
) -> None:
    fetch_and_run_script(url, cwd=str(work_dir), timeout=timeout, dry_run=dry_run)


def patch_alis_config(
    config_file: str | Path,
    *,
    log_trace: bool,
    hostname: Optional[str] = None,
    username: Optional[str] = None,
    verbose: bool = False,
) -> None:
    """Write the run-specific values into an alis profile config."""

    trace = "true" if log_trace else "false"
    modify_line_in_file(config_file, 'LOG_TRACE=".*"', f'LOG_TRACE="{trace}"', verbose=verbose)
    if hostname:
        modify_line_in_file(config_file, 'HOSTNAME=".*"', f'HOSTNAME="{hostname}"', verbose=verbose)
    if username:
        modify_line_in_file(config_file, 'USER_NAME=".*"', f'USER_NAME="{username}"', verbose=verbose)


def activate_profile(work_dir: str | Path, install_type: str, *, dry_run: bool = False) -> None:
    """Rename the profile's files to the names alis.sh reads."""

    wd = Path(work_dir)
    renames = [
        (wd / profile_config_name(install_type), wd / "alis.conf"),
        (wd / profile_packages_name(install_type), wd / "alis-packages.conf"),
    ]
    for src, dst in renames:
        if dry_run:
            logger.info("Would rename %s -> %s", src, dst)
            continue
        if not src.is_file():
            logger.error("File not found: %s", src)
            raise FileNotFoundError(str(src))
        src.replace(dst)
        logger.debug("Renamed %s -> %s", src.name, dst.name)


def run_alis(work_dir: str | Path, *, timeout: float | None = None, dry_run: bool = False) -> None:
    run_cmd(["./alis.sh"], cwd=str(work_dir), capture=False, timeout=timeout, dry_run=dry_run)
