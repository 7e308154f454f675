"""
File download for the pip bootstrap script.
"""

from __future__ import annotations

import logging
import shutil
import urllib.request
from pathlib import Path

from bootfreeze import __version__

logger = logging.getLogger(__name__)


def download_file(url: str, dest: Path, *, timeout: int = 60) -> None:
    """Fetch ``url`` into ``dest``, overwriting it.

    Raises:
        OSError: On any network or filesystem failure
            (``urllib.error.URLError`` is an ``OSError``).
        ValueError: If ``url`` has no usable scheme.
        http.client.HTTPException: If the response is cut short.
    """
    logger.debug("Downloading %s -> %s", url, dest)
    req = urllib.request.Request(
        url,
        headers={"User-Agent": f"bootfreeze/{__version__}"},
    )
    with urllib.request.urlopen(req, timeout=timeout) as resp, open(dest, "wb") as out:
        shutil.copyfileobj(resp, out)
    logger.debug("Downloaded %d bytes", dest.stat().st_size)
