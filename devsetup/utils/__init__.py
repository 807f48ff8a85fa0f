"""
Utility modules for the devsetup package.
"""

from devsetup.utils.platform import IS_MACOS, find_executable, get_platform_info, machine_arch
from devsetup.utils.shell import CmdResult, run_command, format_argv
from devsetup.utils.files import FileWriter, FileChange

__all__ = [
    "IS_MACOS",
    "get_platform_info",
    "find_executable",
    "machine_arch",
    "CmdResult",
    "run_command",
    "format_argv",
    "FileWriter",
    "FileChange",
]
