"""
Catalog Fetching

Retrieves the text of a 3LE catalog from an HTTP(S) endpoint or a local
file. Failures are returned as values rather than raised, so the caller
decides how to report them.
"""

import asyncio
import functools
import logging
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import requests
from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 30.0


class FetchResult(BaseModel):
    """Outcome of fetching a catalog resource."""

    source: str
    ok: bool
    text: Optional[str] = None
    reason: Optional[str] = None
    status_code: Optional[int] = None
    content_type: Optional[str] = None

    @classmethod
    def failure(cls, source: str, reason: str, **kwargs) -> "FetchResult":
        return cls(source=source, ok=False, reason=reason, **kwargs)


def is_remote(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


def fetch_url(url: str, timeout: float = DEFAULT_TIMEOUT_S) -> FetchResult:
    """
    Fetch catalog text over HTTP.

    Succeeds only for a 200 response whose Content-Type mentions text.
    """
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        return FetchResult.failure(url, f"Request failed: {e}")

    content_type = response.headers.get("Content-Type", "")
    if response.status_code != 200:
        return FetchResult.failure(
            url,
            f"HTTP {response.status_code}",
            status_code=response.status_code,
            content_type=content_type,
        )

    if "text" not in content_type.lower():
        return FetchResult.failure(
            url,
            f"Unexpected content type {content_type!r}",
            status_code=response.status_code,
            content_type=content_type,
        )

    return FetchResult(
        source=url,
        ok=True,
        text=response.text,
        status_code=response.status_code,
        content_type=content_type,
    )


def read_file(path: str) -> FetchResult:
    """Read catalog text from a local file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return FetchResult.failure(path, f"Cannot read file: {e}")
    return FetchResult(source=path, ok=True, text=text, content_type="text/plain")


async def fetch_catalog_text(
    source: str, timeout: float = DEFAULT_TIMEOUT_S
) -> FetchResult:
    """
    Fetch catalog text from source.

    HTTP(S) URLs are fetched with requests in the default executor; any
    other source is read as a file path.
    """
    loop = asyncio.get_running_loop()
    if is_remote(source):
        call = functools.partial(fetch_url, source, timeout)
    else:
        call = functools.partial(read_file, source)

    result = await loop.run_in_executor(None, call)

    if result.ok:
        logger.info(f"Fetched {len(result.text)} characters from {source}")
    else:
        logger.error(f"Failed to fetch catalog from {source}: {result.reason}")
    return result
