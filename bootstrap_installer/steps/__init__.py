from .step_10_install_distro import InstallDistroStep
from .step_20_setup_dotfiles import SetupDotfilesStep

__all__ = [
    "InstallDistroStep",
    "SetupDotfilesStep",
]
