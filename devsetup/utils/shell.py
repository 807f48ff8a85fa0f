"""
Subprocess helpers with consistent logging and dry-run support.
"""

import os
import shlex
import subprocess
from dataclasses import dataclass
from typing import List, Mapping, Optional, Sequence

from devsetup.utils.logger import logger

COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class CmdResult:
    """Outcome of a single command invocation."""

    argv: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def format_argv(argv: Sequence[str]) -> str:
    """Format an argument vector as a copy-pasteable shell command."""
    return " ".join(shlex.quote(a) for a in argv)


def run_command(
    argv: Sequence[str],
    *,
    check: bool = False,
    capture_output: bool = False,
    input_text: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
    cwd: Optional[str] = None,
    dry_run: bool = False,
) -> CmdResult:
    """
    Run a command, logging it first.

    By default the command inherits the terminal so installers can prompt
    the operator and stream their own output.

    Args:
        argv: Command and arguments
        check: Raise CalledProcessError on a non-zero exit and
            FileNotFoundError when the executable is missing
        capture_output: Capture stdout/stderr instead of inheriting them
        input_text: Text passed on stdin
        env: Extra environment variables merged over os.environ
        cwd: Working directory
        dry_run: Log the command without executing it

    Returns:
        CmdResult for the invocation
    """
    argv_list = [str(a) for a in argv]
    command = format_argv(argv_list)

    if dry_run:
        logger.info("dry_run_command", command=command)
        return CmdResult(argv=argv_list, returncode=0)

    logger.debug("run_command", command=command)

    try:
        proc = subprocess.run(
            argv_list,
            input=input_text,
            text=True,
            capture_output=capture_output,
            cwd=cwd,
            env=dict(os.environ, **(env or {})),
            check=check,
        )
    except FileNotFoundError:
        if check:
            raise
        logger.warning("command_not_found", command=command)
        return CmdResult(
            argv=argv_list,
            returncode=COMMAND_NOT_FOUND,
            stderr=f"{argv_list[0]}: command not found",
        )

    if proc.returncode != 0:
        logger.warning("command_failed", command=command, returncode=proc.returncode)

    return CmdResult(
        argv=argv_list,
        returncode=proc.returncode,
        stdout=proc.stdout or "",
        stderr=proc.stderr or "",
    )
