"""
HTTP access for the remote skill database.

This module provides the async fetch functions used by the loader: one for
the pointer file that names the current database URL and one for the
database document itself.
"""

import json
import logging
from typing import Any, Dict, Optional

import httpx

from .errors import SourceUnavailable, MalformedSource

logger = logging.getLogger(__name__)


async def fetch_text(client: httpx.AsyncClient, url: str, timeout: Optional[float] = None) -> str:
    """
    Fetch a URL and return its body as text.

    Args:
        client: Open async client to send the request with
        url: The URL to fetch
        timeout: Optional per-request timeout in seconds (client default if None)

    Returns:
        Response body decoded as text

    Raises:
        SourceUnavailable: On transport errors, timeouts, bad URLs or non-2xx status
    """
    kwargs = {}
    if timeout is not None:
        kwargs["timeout"] = timeout

    try:
        response = await client.get(url, **kwargs)
        response.raise_for_status()
    except httpx.TimeoutException as e:
        raise SourceUnavailable(url, f"timed out ({e.__class__.__name__})") from e
    except httpx.HTTPStatusError as e:
        raise SourceUnavailable(url, f"HTTP {e.response.status_code}") from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise SourceUnavailable(url, str(e) or e.__class__.__name__) from e

    logger.debug(f"Fetched {len(response.content)} bytes from {url}")
    return response.text


async def fetch_database_url(client: httpx.AsyncClient, pointer_url: str,
                             timeout: Optional[float] = None) -> str:
    """
    Resolve the pointer file to the URL of the current database document.

    Raises:
        SourceUnavailable: If the pointer cannot be fetched or is empty
    """
    database_url = (await fetch_text(client, pointer_url, timeout)).strip()
    if not database_url:
        raise SourceUnavailable(pointer_url, "pointer file is empty")

    logger.info(f"Skill database is published at {database_url}")
    return database_url


async def fetch_skill_database(client: httpx.AsyncClient, pointer_url: str,
                               timeout: Optional[float] = None) -> Dict[str, Any]:
    """
    Fetch and decode the skill database document.

    Args:
        client: Open async client to send the requests with
        pointer_url: URL of the plain-text file naming the database URL
        timeout: Optional per-request timeout in seconds

    Returns:
        The decoded JSON document

    Raises:
        SourceUnavailable: If either fetch fails
        MalformedSource: If the document is not valid JSON
    """
    database_url = await fetch_database_url(client, pointer_url, timeout)
    content = await fetch_text(client, database_url, timeout)
    if not content.strip():
        raise SourceUnavailable(database_url, "database document is empty")

    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedSource(database_url, f"invalid JSON: {e}") from e
