"""
Exception types shared across the bootstrap installer.

main() turns any BootstrapError into a logged message and exit code 1.
"""

from __future__ import annotations


class BootstrapError(RuntimeError):
    """Base class for expected, user-facing failures."""


class DistroDetectionError(BootstrapError):
    """No distro was given and the host could not be identified."""


class UnsupportedDistroError(BootstrapError):
    """The resolved distro has no installer."""


class DotfilesError(BootstrapError):
    """Raised when the dotfiles checkout cannot be prepared."""
