"""Bootstrap installer: distro install glue plus dotfiles setup.

Core design goals:
- Delegate the real install to the distro's upstream installer (alis on Arch)
- One immutable config record per run
- Every external command logged and bounded by a timeout
- Centralized logging
"""

__all__ = []
