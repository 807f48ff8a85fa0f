"""
Go release helpers: architecture mapping, release listing and selection.
"""

import re
from typing import Any, Dict, List, Optional

from devsetup.errors import FatalStepError

# uname -m value -> suffix used in go.dev archive names
GO_ARCH_MAP: Dict[str, str] = {
    "arm64": "arm64",
    "x86_64": "amd64",
}

# Stable releases only ("go1.23.2"); rc and beta builds do not match.
STABLE_VERSION_RE = re.compile(r"^go[0-9.]*$")

# ASCII digits only; str.isdigit() also accepts "²" and "①".
MENU_CHOICE_RE = re.compile(r"[0-9]+")

MAX_VERSIONS = 10


def go_arch_for(machine: str) -> str:
    """
    Map a CPU architecture to the Go archive suffix.

    Raises:
        FatalStepError: If the architecture is not supported
    """
    try:
        return GO_ARCH_MAP[machine]
    except KeyError:
        raise FatalStepError(f"Unsupported architecture: {machine}") from None


def parse_go_versions(releases: Any, limit: int = MAX_VERSIONS) -> List[str]:
    """
    Extract the newest stable version identifiers from a go.dev release listing.

    Args:
        releases: Decoded JSON from https://go.dev/dl/?mode=json&include=all,
            newest release first
        limit: Maximum number of versions to return

    Returns:
        Version identifiers such as ["go1.23.2", "go1.23.1", ...]
    """
    versions: List[str] = []
    if not isinstance(releases, list):
        return versions

    for release in releases:
        if not isinstance(release, dict):
            continue
        version = release.get("version")
        if isinstance(version, str) and STABLE_VERSION_RE.match(version):
            versions.append(version)
            if len(versions) >= limit:
                break

    return versions


def select_version(versions: List[str], choice: Optional[str]) -> str:
    """
    Resolve a 1-indexed menu selection to a version.

    An empty choice selects entry 1 (the latest release).

    Raises:
        FatalStepError: If the choice is not a number in [1, len(versions)]
    """
    choice = (choice or "").strip() or "1"
    if not MENU_CHOICE_RE.fullmatch(choice):
        raise FatalStepError("Invalid selection.")

    index = int(choice)
    if index < 1 or index > len(versions):
        raise FatalStepError("Invalid selection.")

    return versions[index - 1]


def go_archive_name(version: str, os_name: str, arch: str) -> str:
    """Archive file name, e.g. go1.23.2.darwin-arm64.tar.gz."""
    return f"{version}.{os_name}-{arch}.tar.gz"
