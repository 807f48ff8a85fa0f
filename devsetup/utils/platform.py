"""
Platform detection utilities.
"""

import platform
import shutil
from typing import Optional


IS_MACOS = platform.system() == "Darwin"


def find_executable(command: str) -> Optional[str]:
    """
    Look up a command on the executable search path.

    Args:
        command: The command name to look up (e.g., 'brew', 'go')

    Returns:
        Absolute path of the executable, or None if it is not on PATH
    """
    return shutil.which(command)


def machine_arch() -> str:
    """Return the raw CPU architecture string (as reported by `uname -m`)."""
    return platform.machine()


def get_platform_info() -> dict:
    """
    Get information about the current platform.

    Returns:
        Dictionary with platform information
    """
    return {
        "system": platform.system(),
        "release": platform.release(),
        "machine": platform.machine(),
        "python_version": platform.python_version(),
        "is_macos": IS_MACOS,
    }
