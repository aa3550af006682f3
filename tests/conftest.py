from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, Dict, List, Optional

import pytest

ALIS_MINIMAL_CONF = (
    '# alis minimal profile\n'
    'LOG_TRACE="false"\n'
    'KEYS="us"\n'
    'HOSTNAME="archlinux"\n'
    'USER_NAME="picodotdev"\n'
    'USER_PASSWORD="ask"\n'
)


class FakeRun:
    """Stands in for subprocess.run inside bootstrap_installer.lib.command.

    Handlers are keyed by argv[0] and may create files to mimic the real
    command's side effects.
    """

    def __init__(self) -> None:
        self.calls: List[Dict[str, object]] = []
        self.handlers: Dict[str, Callable[..., Optional[subprocess.CompletedProcess]]] = {}

    def on(self, program: str, handler: Callable[..., Optional[subprocess.CompletedProcess]]) -> None:
        self.handlers[program] = handler

    def programs(self) -> List[str]:
        return [c["argv"][0] for c in self.calls]  # type: ignore[index]

    def __call__(self, argv, *, input=None, text=None, stdout=None, stderr=None, cwd=None, env=None, timeout=None):
        self.calls.append({"argv": list(argv), "input": input, "cwd": cwd, "timeout": timeout, "captured": stdout is not None})
        handler = self.handlers.get(argv[0])
        result = handler(list(argv), cwd=cwd, input=input) if handler else None
        if result is None:
            result = subprocess.CompletedProcess(argv, 0, "", "")
        if stdout is None:
            result = subprocess.CompletedProcess(result.args, result.returncode, None, None)
        return result


@pytest.fixture
def alis_minimal_conf() -> str:
    return ALIS_MINIMAL_CONF


@pytest.fixture
def fake_run(monkeypatch) -> FakeRun:
    fake = FakeRun()
    monkeypatch.setattr("bootstrap_installer.lib.command.subprocess.run", fake)
    return fake


@pytest.fixture
def alis_download(fake_run: FakeRun) -> FakeRun:
    """Make `curl | bash` drop a minimal alis checkout into the working directory."""

    def curl(argv, cwd=None, input=None):
        return subprocess.CompletedProcess(argv, 0, "#!/bin/bash\necho downloading alis\n", "")

    def bash(argv, cwd=None, input=None):
        if len(argv) == 1:
            wd = Path(cwd or ".")
            (wd / "alis.sh").write_text("#!/bin/bash\n", encoding="utf-8")
            (wd / "alis-minimal.conf").write_text(ALIS_MINIMAL_CONF, encoding="utf-8")
            (wd / "alis-packages-minimal.conf").write_text('PACKAGES_PIPEWIRE="false"\n', encoding="utf-8")
        return None

    fake_run.on("curl", curl)
    fake_run.on("bash", bash)
    return fake_run


@pytest.fixture(autouse=True)
def reset_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for attr in ("_bootstrap_configured", "_bootstrap_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)
    root.setLevel(level)
