"""Command line and host resolution.

Turns argv (plus the optional settings file and /etc/os-release) into a
single BootstrapConfig. Bad input is fatal: usage goes to stderr and the
process exits with status 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import NoReturn, Optional, Sequence

from .bootstrap_config import INSTALL_TYPES, SUPPORTED_DISTROS, BootstrapConfig, Settings
from .errors import DistroDetectionError
from .lib.osrelease import OS_RELEASE_PATH, read_os_release

logger = logging.getLogger(__name__)

EPILOG = """\
Example:
    bootstrap-installer --distro arch --type minimal --hostname myhost --verbose
"""


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on bad input."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _non_empty(label: str):
    def check(value: str) -> str:
        if not value:
            raise argparse.ArgumentTypeError(f"No {label} specified")
        return value

    check.__name__ = label
    return check


def build_parser() -> argparse.ArgumentParser:
    p = _Parser(
        prog="bootstrap-installer",
        allow_abbrev=False,
        description="Install a Linux distro with its upstream installer, then set up dotfiles.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument(
        "-d",
        "--distro",
        choices=SUPPORTED_DISTROS,
        default=None,
        help="Distribution to install (detected from /etc/os-release if not set)",
    )
    p.add_argument("-t", "--type", dest="install_type", choices=INSTALL_TYPES, default=None, help="Install type")
    p.add_argument(
        "-g",
        "--git",
        dest="repo",
        type=_non_empty("git repo"),
        default=None,
        help="Dotfiles git repo (an install.sh at its root is run if present)",
    )
    p.add_argument(
        "-c",
        "--config",
        dest="config_dir",
        type=_non_empty("config directory"),
        default=None,
        help="Directory of files overriding the distro installer's config",
    )
    p.add_argument("-n", "--hostname", type=_non_empty("hostname"), default=None, help="Hostname for the system")
    p.add_argument("-u", "--user", dest="username", type=_non_empty("username"), default=None, help="User account for the system")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")

    p.add_argument("--settings", default=None, help="YAML file with default settings")
    p.add_argument("--log", default=None, help="Path to the bootstrap log")
    p.add_argument("--dry-run", action="store_true", help="Log external commands without running them")
    p.add_argument("--start-at", default=None, help="Start at step_id (e.g. 20_setup_dotfiles)")
    p.add_argument("--stop-after", default=None, help="Stop after step_id")
    return p


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def resolve_config(
    args: argparse.Namespace,
    settings: Settings,
    *,
    os_release_path: str | Path = OS_RELEASE_PATH,
) -> BootstrapConfig:
    if args.distro:
        distro = args.distro
        version = ""
        logger.info("Specified distro: %s", distro)
    else:
        try:
            release = read_os_release(os_release_path)
        except FileNotFoundError as e:
            raise DistroDetectionError("Cannot detect Linux distro and no target distro was specified.") from e
        distro = release.get("ID", "")
        version = release.get("VERSION_ID", "")
        if not distro:
            raise DistroDetectionError(f"No ID in {os_release_path}; specify --distro.")

    install_type = args.install_type or settings.install_type
    if install_type not in INSTALL_TYPES:
        raise ValueError(f"Invalid install type {install_type!r} (expected one of: {', '.join(INSTALL_TYPES)})")

    return BootstrapConfig(
        distro=distro,
        version=version,
        install_type=install_type,
        dotfiles_repo_url=args.repo or settings.dotfiles_repo,
        config_dir=Path(args.config_dir) if args.config_dir else settings.config_dir,
        hostname=args.hostname,
        username=args.username,
        verbose=bool(args.verbose),
        dotfiles_dir=settings.dotfiles_dir,
        work_dir=settings.work_dir,
        dry_run=bool(args.dry_run),
        keymap=settings.keymap,
        alis_download_url=settings.alis_download_url,
        timeouts=settings.timeouts,
    )
