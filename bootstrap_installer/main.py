from __future__ import annotations

import logging
from typing import Optional, Sequence

from .bootstrap_config import BootstrapConfig, load_settings
from .errors import BootstrapError
from .lib.osrelease import OS_RELEASE_PATH
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import PipelineResult, run_pipeline
from .resolver import parse_args, resolve_config
from .steps import InstallDistroStep, SetupDotfilesStep

logger = logging.getLogger(__name__)


def build_steps():
    return [
        InstallDistroStep(),
        SetupDotfilesStep(),
    ]


def run(
    config: BootstrapConfig,
    *,
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
) -> PipelineResult:
    """Install the distro, then set up dotfiles."""

    logger.info("Installing distro: %s %s", config.distro, config.version)
    result = run_pipeline(
        config=config,
        steps=build_steps(),
        start_at=start_at,
        stop_after=stop_after,
    )
    logger.info("System has been initialized successfully!")
    return result


def main(argv: Optional[Sequence[str]] = None, *, os_release_path: str = OS_RELEASE_PATH) -> int:
    args = parse_args(argv)

    configure_logging(
        log_path=args.log or DEFAULT_LOG_PATH,
        level=logging.DEBUG if args.verbose else logging.INFO,
    )

    try:
        settings = load_settings(args.settings)
        config = resolve_config(args, settings, os_release_path=os_release_path)
        run(config, start_at=args.start_at, stop_after=args.stop_after)
    except (BootstrapError, OSError, ValueError) as e:
        logger.error("%s", e)
        logger.debug("Bootstrap failed", exc_info=True)
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
