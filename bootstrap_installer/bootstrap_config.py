from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .lib.alis import ALIS_DOWNLOAD_URL

SUPPORTED_DISTROS = ("ubuntu", "debian", "fedora", "rocky", "arch")
INSTALL_TYPES = ("desktop", "desktop-hypr", "laptop-hypr", "server", "minimal")

DEFAULT_INSTALL_TYPE = "minimal"
DEFAULT_DOTFILES_REPO = "https://github.com/codenobacon4u/dotfiles.git"
DEFAULT_DOTFILES_DIR = "~/.dotfiles"
DEFAULT_CONFIG_DIR = "./config/arch"
DEFAULT_KEYMAP = "us"


@dataclass(frozen=True)
class Timeouts:
    """Seconds allowed for each kind of external command."""

    download: float = 300.0
    clone: float = 600.0
    installer: float = 14400.0
    dotfiles_script: float = 3600.0
    misc: float = 60.0


@dataclass(frozen=True)
class BootstrapConfig:
    """Everything one run needs. Built once by the resolver, never persisted."""

    distro: str
    version: str = ""
    install_type: str = DEFAULT_INSTALL_TYPE
    dotfiles_repo_url: str = DEFAULT_DOTFILES_REPO
    config_dir: Path = Path(DEFAULT_CONFIG_DIR)
    hostname: Optional[str] = None
    username: Optional[str] = None
    verbose: bool = False

    dotfiles_dir: Path = field(default_factory=lambda: Path(DEFAULT_DOTFILES_DIR).expanduser())
    work_dir: Path = Path(".")
    dry_run: bool = False
    keymap: str = DEFAULT_KEYMAP
    alis_download_url: str = ALIS_DOWNLOAD_URL
    timeouts: Timeouts = Timeouts()


@dataclass(frozen=True)
class Settings:
    """Defaults read from an optional YAML settings file."""

    raw: Dict[str, Any] = field(default_factory=dict)

    def _section(self, name: str) -> Dict[str, Any]:
        section = self.raw.get(name) or {}
        if not isinstance(section, dict):
            raise ValueError(f"settings section {name!r} must be a mapping, got {type(section).__name__}")
        return section

    @property
    def dotfiles_repo(self) -> str:
        return str(self._section("dotfiles").get("repo") or DEFAULT_DOTFILES_REPO)

    @property
    def dotfiles_dir(self) -> Path:
        return Path(str(self._section("dotfiles").get("dir") or DEFAULT_DOTFILES_DIR)).expanduser()

    @property
    def install_type(self) -> str:
        return str(self._section("install").get("type") or DEFAULT_INSTALL_TYPE)

    @property
    def config_dir(self) -> Path:
        return Path(str(self._section("install").get("config_dir") or DEFAULT_CONFIG_DIR))

    @property
    def work_dir(self) -> Path:
        return Path(str(self._section("install").get("work_dir") or "."))

    @property
    def keymap(self) -> str:
        return str(self._section("install").get("keymap") or DEFAULT_KEYMAP)

    @property
    def alis_download_url(self) -> str:
        return str(self._section("alis").get("download_url") or ALIS_DOWNLOAD_URL)

    @property
    def timeouts(self) -> Timeouts:
        raw = self._section("timeouts")
        defaults = Timeouts()
        values: Dict[str, float] = {}
        for name in ("download", "clone", "installer", "dotfiles_script", "misc"):
            value = raw.get(name, getattr(defaults, name))
            try:
                values[name] = float(value)
            except (TypeError, ValueError) as e:
                raise ValueError(f"settings timeouts.{name} must be a number of seconds, got {value!r}") from e
        return Timeouts(**values)


def load_settings(path: Optional[str]) -> Settings:
    if not path:
        return Settings()

    p = Path(path).expanduser()
    if not p.exists():
        raise FileNotFoundError(str(p))

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise ValueError(f"settings file must be YAML: {p}")

    try:
        import yaml  # type: ignore
    except Exception as e:
        raise RuntimeError("PyYAML is required to read the settings file") from e

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"settings file is not valid YAML: {p}: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"settings file must contain a mapping/object: {p}")

    return Settings(raw=raw)
