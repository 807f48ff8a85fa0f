"""
HTTP helpers for installer scripts, release listings and archives.

Requests carry no timeout: a slow mirror blocks the run rather than
aborting half-way through an install.
"""

from pathlib import Path
from typing import Any, Union

import httpx

from devsetup.utils.logger import logger

USER_AGENT = "devsetup/1.0"


def _client() -> httpx.Client:
    return httpx.Client(
        timeout=None,
        follow_redirects=True,
        headers={"User-Agent": USER_AGENT},
    )


def fetch_text(url: str) -> str:
    """
    Fetch a text resource such as an installer script.

    Raises:
        httpx.HTTPError: On transport errors or non-2xx responses
    """
    logger.debug("fetch_text", url=url)
    with _client() as client:
        response = client.get(url)
        response.raise_for_status()
        return response.text


def fetch_json(url: str) -> Any:
    """Fetch and decode a JSON document."""
    logger.debug("fetch_json", url=url)
    with _client() as client:
        response = client.get(url)
        response.raise_for_status()
        return response.json()


def download_file(url: str, destination: Union[str, Path]) -> Path:
    """
    Stream a remote file to disk.

    A partially written file is removed if the transfer fails.

    Args:
        url: Source URL
        destination: Target file path

    Returns:
        Path of the downloaded file
    """
    dest = Path(destination)
    logger.info("download_file", url=url, destination=str(dest))
    try:
        with _client() as client, client.stream("GET", url) as response:
            response.raise_for_status()
            with open(dest, "wb") as f:
                for chunk in response.iter_bytes():
                    f.write(chunk)
    except BaseException:
        dest.unlink(missing_ok=True)
        raise
    return dest
