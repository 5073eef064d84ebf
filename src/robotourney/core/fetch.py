"""Snapshot sources — where the competition summary JSON comes from.

Two sources share one interface:
- HttpSnapshotSource: one GET per fetch via aiohttp
- FileSnapshotSource: reads a local file (competition-state/ checked out
  next to the viewer, or a file written by the competition server)

Neither retries. Timeouts belong to aiohttp's ClientTimeout.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Protocol

import aiohttp

from robotourney.core.snapshot import SnapshotError

logger = logging.getLogger(__name__)

DEFAULT_LOCATION = "competition-state/competition-summary.json"

_NOT_FOUND = 404


class FetchError(Exception):
    """Raised by snapshot sources. Never let raw aiohttp exceptions propagate."""

    def __init__(self, status: int | None, status_text: str = ""):
        self.status = status  # None for transport failures and timeouts
        self.status_text = status_text
        super().__init__(f"{status if status is not None else 'transport'}: {status_text}")

    @property
    def not_found(self) -> bool:
        return self.status == _NOT_FOUND


class SnapshotSource(Protocol):
    location: str

    async def fetch(self) -> Any:
        """Return the decoded JSON document."""


def _decode(body: bytes, location: str) -> Any:
    try:
        return json.loads(body.decode("utf-8"))
    except UnicodeDecodeError as exc:
        logger.error("Undecodable body from %s: %s", location, exc)
        raise SnapshotError(f"body from {location} is not UTF-8: {exc}") from exc
    except json.JSONDecodeError as exc:
        logger.error("Invalid JSON from %s: %s", location, exc)
        raise SnapshotError(f"invalid JSON from {location}: {exc}") from exc


class HttpSnapshotSource:
    """GET the summary document over HTTP."""

    def __init__(self, url: str, timeout_s: float = 10.0) -> None:
        self.location = url
        self._timeout = aiohttp.ClientTimeout(total=timeout_s)

    async def fetch(self) -> Any:
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.get(self.location) as response:
                    if response.status >= 400:
                        error = FetchError(response.status, response.reason or "")
                        if error.not_found:
                            logger.info("No competition at %s (404)", self.location)
                        else:
                            logger.error("Fetching %s failed: %s", self.location, error)
                        raise error
                    body = await response.read()
        except asyncio.TimeoutError as exc:
            logger.error("Timed out fetching %s", self.location)
            raise FetchError(None, "timeout") from exc
        except aiohttp.ClientError as exc:
            logger.error("Fetching %s failed: %s", self.location, exc)
            raise FetchError(None, str(exc)) from exc
        return _decode(body, self.location)


class FileSnapshotSource:
    """Read the summary document from disk; a missing file reads as 404."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.location = str(self.path)

    async def fetch(self) -> Any:
        try:
            body = await asyncio.to_thread(self.path.read_bytes)
        except FileNotFoundError as exc:
            logger.info("No competition at %s (missing file)", self.location)
            raise FetchError(_NOT_FOUND, "Not Found") from exc
        except OSError as exc:
            logger.error("Reading %s failed: %s", self.location, exc)
            raise FetchError(None, str(exc)) from exc
        return _decode(body, self.location)


def open_source(location: str, timeout_s: float = 10.0) -> SnapshotSource:
    """Pick a source for a URL or a filesystem path."""
    if location.startswith(("http://", "https://")):
        return HttpSnapshotSource(location, timeout_s=timeout_s)
    return FileSnapshotSource(location)
