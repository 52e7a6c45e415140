"""Shader source loading from paths and URIs."""

import asyncio
from pathlib import Path
from urllib.parse import urlsplit
from urllib.request import url2pathname

import httpx
from loguru import logger

from .errors import SourceUnavailable

REMOTE_SCHEMES = ("http", "https")


def _read_text(path: Path) -> str:
    with open(path, encoding="utf-8") as f:
        return f.read()


async def _fetch_remote(location: str, client: httpx.AsyncClient | None) -> str:
    try:
        if client is not None:
            response = await client.get(location)
        else:
            async with httpx.AsyncClient(follow_redirects=True) as own_client:
                response = await own_client.get(location)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise SourceUnavailable(
            location, f"HTTP {e.response.status_code}"
        ) from e
    except httpx.HTTPError as e:
        raise SourceUnavailable(location, str(e) or type(e).__name__) from e
    return response.text


async def load_shader_source(
    location: str | Path,
    *,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Retrieve the full text of a shader program.

    Args:
        location: Filesystem path, ``file://`` URI or ``http(s)://`` URL
        client: Optional HTTP client for remote locations; it is not closed

    Returns:
        Complete shader source text

    Raises:
        SourceUnavailable: If the location cannot be read
    """
    location = str(location)
    parts = urlsplit(location)

    if parts.scheme in REMOTE_SCHEMES:
        text = await _fetch_remote(location, client)
    else:
        if parts.scheme == "file":
            path = Path(url2pathname(parts.path))
        else:
            path = Path(location)
        try:
            text = await asyncio.to_thread(_read_text, path)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceUnavailable(location, str(e)) from e

    logger.info(f"Loaded shader source from {location} ({len(text)} characters)")
    return text
