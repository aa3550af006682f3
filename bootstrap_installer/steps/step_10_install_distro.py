from __future__ import annotations

import logging
from typing import Callable, Dict

from ..bootstrap_config import BootstrapConfig
from ..errors import UnsupportedDistroError
from ..lib.alis import activate_profile, download_alis, patch_alis_config, profile_config_name, run_alis
from ..lib.assets import copy_overrides
from ..lib.command import run_cmd

logger = logging.getLogger(__name__)


def install_arch(config: BootstrapConfig) -> None:
    wd = config.work_dir
    t = config.timeouts
    dry_run = config.dry_run

    logger.debug("Installing ArchLinux using picodotdev/alis...")
    run_cmd(["loadkeys", config.keymap], timeout=t.misc, dry_run=dry_run)
    download_alis(wd, url=config.alis_download_url, timeout=t.download, dry_run=dry_run)
    copy_overrides(config.config_dir, wd, dry_run=dry_run)

    config_file = wd / profile_config_name(config.install_type)
    if dry_run:
        logger.info(
            "Would patch %s (LOG_TRACE=%s, HOSTNAME=%s, USER_NAME=%s)",
            config_file,
            config.verbose,
            config.hostname or "-",
            config.username or "-",
        )
    else:
        patch_alis_config(
            config_file,
            log_trace=config.verbose,
            hostname=config.hostname,
            username=config.username,
            verbose=config.verbose,
        )

    activate_profile(wd, config.install_type, dry_run=dry_run)
    run_alis(wd, timeout=t.installer, dry_run=dry_run)


INSTALLERS: Dict[str, Callable[[BootstrapConfig], None]] = {
    "arch": install_arch,
}


def install_distro(config: BootstrapConfig) -> None:
    installer = INSTALLERS.get(config.distro)
    if installer is None:
        raise UnsupportedDistroError(f"Unsupported distro: {config.distro}")
    installer(config)


class InstallDistroStep:
    step_id = "10_install_distro"

    def run(self, config: BootstrapConfig) -> None:
        install_distro(config)
