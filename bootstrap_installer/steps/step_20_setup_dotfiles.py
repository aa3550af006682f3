from __future__ import annotations

import logging

from ..bootstrap_config import BootstrapConfig
from ..lib.dotfiles import backup_existing, clone_repo, run_install_script

logger = logging.getLogger(__name__)


def setup_dotfiles(config: BootstrapConfig) -> None:
    logger.info("Setting up dotfiles...")
    t = config.timeouts

    backup_existing(config.dotfiles_dir, dry_run=config.dry_run)
    clone_repo(config.dotfiles_repo_url, config.dotfiles_dir, timeout=t.clone, dry_run=config.dry_run)
    run_install_script(config.dotfiles_dir, timeout=t.dotfiles_script, dry_run=config.dry_run)


class SetupDotfilesStep:
    step_id = "20_setup_dotfiles"

    def run(self, config: BootstrapConfig) -> None:
        setup_dotfiles(config)
