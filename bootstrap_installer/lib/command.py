from __future__ import annotations

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from ..errors import BootstrapError

logger = logging.getLogger(__name__)


DEFAULT_TIMEOUT_S = 60.0


class CommandError(BootstrapError):
    def __init__(self, message: str, *, argv: Sequence[str], returncode: Optional[int] = None, timed_out: bool = False):
        super().__init__(message)
        self.argv = list(argv)
        self.returncode = returncode
        self.timed_out = timed_out


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str


def _fmt_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
    input_text: str | None = None,
    capture: bool = True,
    timeout: float | None = DEFAULT_TIMEOUT_S,
    dry_run: bool = False,
) -> CmdResult:
    """Run a command with consistent logging and an explicit timeout.

    - Always logs the command.
    - capture=False hands the terminal to the child (interactive installers).
    - dry_run logs but does not execute.
    """

    argv_list = list(argv)
    logger.info("CMD %s", _fmt_argv(argv_list))

    if dry_run:
        return CmdResult(argv=argv_list, returncode=0, stdout="", stderr="")

    pipe = subprocess.PIPE if capture else None
    try:
        p = subprocess.run(
            argv_list,
            input=input_text,
            text=True,
            stdout=pipe,
            stderr=pipe,
            cwd=cwd,
            env=dict(os.environ, **(env or {})),
            timeout=timeout,
        )
    except subprocess.TimeoutExpired as e:
        raise CommandError(
            f"Command timed out after {timeout}s: {_fmt_argv(argv_list)}",
            argv=argv_list,
            timed_out=True,
        ) from e
    except FileNotFoundError as e:
        raise CommandError(f"Command not found: {argv_list[0]}", argv=argv_list) from e

    stdout = p.stdout or ""
    stderr = p.stderr or ""
    if stdout:
        logger.debug("STDOUT %s", stdout.strip())
    if stderr:
        logger.debug("STDERR %s", stderr.strip())

    if check and p.returncode != 0:
        raise CommandError(
            f"Command failed ({p.returncode}): {_fmt_argv(argv_list)}\n{stderr}".rstrip(),
            argv=argv_list,
            returncode=p.returncode,
        )

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=stdout, stderr=stderr)


def fetch_and_run_script(
    url: str,
    *,
    cwd: str | None = None,
    timeout: float | None = DEFAULT_TIMEOUT_S,
    dry_run: bool = False,
) -> CmdResult:
    """Equivalent of `curl -sL URL | bash`, without going through a shell."""

    script = run_cmd(["curl", "-sL", url], timeout=timeout, dry_run=dry_run)
    return run_cmd(["bash"], cwd=cwd, input_text=script.stdout, timeout=timeout, dry_run=dry_run)
