"""
File writer with dry-run support.
"""

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from devsetup.utils.logger import logger

PathLike = Union[str, Path]


@dataclass
class FileChange:
    """Represents a file change made (or planned) by a step."""

    path: str
    description: str


@dataclass
class FileWriter:
    """
    Copy and write files into the user's profile.

    In dry-run mode changes are only recorded, never applied.
    """

    dry_run: bool = False
    changes: List[FileChange] = field(default_factory=list)

    def copy_file(self, source: PathLike, destination: PathLike) -> Path:
        """
        Copy a file, overwriting the destination and creating parent directories.

        Raises:
            FileNotFoundError: If the source does not exist
        """
        src = Path(source)
        dest = Path(destination)
        if not src.is_file():
            raise FileNotFoundError(f"Source file not found: {src}")

        self._record(dest, f"copied from {src}")
        if not self.dry_run:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(src, dest)
        return dest

    def write_file(self, path: PathLike, content: str, mode: Optional[int] = None) -> Path:
        """Write text content to a file, creating parent directories."""
        dest = Path(path)
        self._record(dest, "written")
        if not self.dry_run:
            dest.parent.mkdir(parents=True, exist_ok=True)
            dest.write_text(content)
            if mode is not None:
                dest.chmod(mode)
        return dest

    def append_line(self, path: PathLike, line: str) -> bool:
        """
        Append a line to a file unless an identical line is already present.

        Returns:
            True if the line was appended
        """
        dest = Path(path)
        if dest.exists() and line in dest.read_text().splitlines():
            logger.debug("line_already_present", path=str(dest))
            return False

        self._record(dest, f"appended: {line}")
        if not self.dry_run:
            dest.parent.mkdir(parents=True, exist_ok=True)
            prefix = ""
            if dest.exists():
                existing = dest.read_text()
                if existing and not existing.endswith("\n"):
                    prefix = "\n"
            with open(dest, "a") as f:
                f.write(f"{prefix}{line}\n")
        return True

    def _record(self, path: Path, description: str) -> None:
        logger.info("file_change", path=str(path), description=description, dry_run=self.dry_run)
        self.changes.append(FileChange(path=str(path), description=description))
