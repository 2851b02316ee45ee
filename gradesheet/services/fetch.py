from __future__ import annotations

import logging
import re
from pathlib import Path

import requests

from .progress import DownloadProgress

"""Fetch boundary: published sheet export -> text.

This is the only fallible I/O of the tool. Transport failures and non-2xx
responses are reported as a single FetchError; no retries, timeouts or
partial bodies. Parsing happens elsewhere (gradesheet.sheets).
"""

__all__ = [
    "FetchError",
    "fetch_sheet_text",
    "normalize_export_url",
    "read_local_text",
]

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

# The publish endpoint is cached upstream; ask for a fresh copy
NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


class FetchError(Exception):
    """Raised when the sheet text cannot be obtained."""


def normalize_export_url(url: str) -> str:
    """Rewrite a ``pubhtml`` publish link to its CSV export form.

    >>> normalize_export_url("https://docs.google.com/spreadsheets/d/e/X/pubhtml?gid=7")
    'https://docs.google.com/spreadsheets/d/e/X/pub?output=csv&gid=7'

    Links that already point at an export are returned trimmed.
    """
    u = (url or "").strip()
    if "/pubhtml" not in u:
        return u
    u = u.replace("/pubhtml", "/pub")
    m = re.search(r"[?&]gid=([^&#]+)", u)
    base = u.split("?")[0]
    if m:
        return f"{base}?output=csv&gid={m.group(1)}"
    return f"{base}?output=csv"


def fetch_sheet_text(
    url: str,
    *,
    session: requests.Session | None = None,
    progress: bool = True,
) -> str:
    """Download the published export and return it as text.

    Args:
        url: Export URL (pubhtml links are rewritten)
        session: Optional requests session, mainly for tests
        progress: Show a tqdm download bar when stdout is a TTY

    Returns:
        The UTF-8 decoded body. A leading BOM is kept; the row splitter drops it

    Raises:
        FetchError: network failure, non-2xx status or undecodable body
    """
    export_url = normalize_export_url(url)
    if not export_url:
        raise FetchError("no sheet URL configured")

    own_session = session is None
    http = requests.Session() if own_session else session
    try:
        body = _download(http, export_url, progress)
    finally:
        if own_session:
            http.close()

    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FetchError(f"response body from {export_url} is not valid UTF-8: {e}") from e
    logger.debug("fetched %d bytes from %s", len(body), export_url)
    return text


def _download(http: requests.Session, export_url: str, progress: bool) -> bytes:
    try:
        response = http.get(export_url, headers=NO_CACHE_HEADERS, stream=True)
    except requests.RequestException as e:
        raise FetchError(f"request to {export_url} failed: {e}") from e

    try:
        status = response.status_code
        if not 200 <= status < 300:
            raise FetchError(f"unexpected HTTP status {status} from {export_url}")

        length = response.headers.get("Content-Length")
        total = int(length) if length and str(length).isdigit() else None
        chunks: list[bytes] = []
        with DownloadProgress(total, enabled=progress) as bar:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    chunks.append(chunk)
                    bar.update(len(chunk))
        return b"".join(chunks)
    except requests.RequestException as e:
        raise FetchError(f"reading response from {export_url} failed: {e}") from e
    finally:
        response.close()


def read_local_text(path: Path | str) -> str:
    """Read a local export (demo data, offline runs).

    Raises:
        FetchError: the file is missing or unreadable
    """
    p = Path(path)
    if not p.is_file():
        raise FetchError(f"sheet file not found: {p}")
    try:
        return p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FetchError(f"cannot read sheet file {p}: {e}") from e
