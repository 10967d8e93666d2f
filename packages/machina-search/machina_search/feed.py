"""Public photo feed client protocol, urllib implementation and mock."""
from __future__ import annotations

import json
import time
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Protocol, runtime_checkable

from machina_search.config import SearchConfig


class FeedError(Exception):
    """Raised when the feed cannot be fetched or decoded."""


@dataclass(frozen=True)
class FeedItem:
    """One photo from the public feed."""

    title: str
    link: str
    media_url: str
    author: str = ""
    tags: tuple[str, ...] = ()


@runtime_checkable
class FeedClient(Protocol):
    """Protocol for feed clients.

    Implementations block (they are called from a thread pool worker) and
    raise FeedError on failure.
    """

    def fetch(self, query: str) -> list[FeedItem]:
        ...


def parse_feed(body: Any, limit: int | None = None) -> list[FeedItem]:
    """Convert a decoded public-feed JSON document into FeedItems.

    Items without a media URL are skipped.
    """
    if not isinstance(body, Mapping) or not isinstance(body.get("items"), list):
        raise FeedError("Feed response has no 'items' list")

    items: list[FeedItem] = []
    for raw in body["items"]:
        if not isinstance(raw, Mapping):
            continue
        media = raw.get("media") or {}
        media_url = media.get("m") if isinstance(media, Mapping) else None
        if not media_url:
            continue
        items.append(FeedItem(
            title=str(raw.get("title") or ""),
            link=str(raw.get("link") or ""),
            media_url=str(media_url),
            author=str(raw.get("author") or ""),
            tags=tuple(str(raw.get("tags") or "").split()),
        ))
        if limit is not None and len(items) >= limit:
            break
    return items


class PublicFeedClient:
    """Feed client for the public photo feed, using stdlib urllib.

    Requests ``format=json&nojsoncallback=1`` so the body is plain JSON.
    """

    def __init__(self, config: SearchConfig | None = None) -> None:
        self._config = config if config is not None else SearchConfig()

    def url_for(self, query: str) -> str:
        params = urllib.parse.urlencode({
            "lang": self._config.lang,
            "format": "json",
            "nojsoncallback": 1,
            "tags": query,
        })
        return f"{self._config.feed_url}?{params}"

    def fetch(self, query: str) -> list[FeedItem]:
        """Fetch and decode the feed for ``query``."""
        req = urllib.request.Request(
            self.url_for(query),
            headers={"Accept": "application/json"},
            method="GET",
        )
        try:
            with urllib.request.urlopen(req, timeout=self._config.request_timeout) as resp:
                body = json.loads(resp.read().decode("utf-8"))
        except (urllib.error.URLError, TimeoutError) as exc:
            raise FeedError(f"Feed request failed: {exc}") from exc
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise FeedError(f"Feed response is not valid JSON: {exc}") from exc

        return parse_feed(body, limit=self._config.max_results)


class MockFeedClient:
    """Deterministic feed client for testing.

    Args:
        responses: A dict mapping query strings to item lists, OR a callable
            str -> list[FeedItem]. Unknown queries return an empty list.
        latency: Simulated delay in seconds before returning.
        error: Exception instance to raise instead of answering.
    """

    def __init__(
        self,
        responses: Mapping[str, list[FeedItem]] | Callable[[str], list[FeedItem]],
        latency: float = 0.0,
        error: BaseException | None = None,
    ) -> None:
        self._responses = responses
        self._latency = latency
        self._error = error
        self.queries: list[str] = []

    def fetch(self, query: str) -> list[FeedItem]:
        self.queries.append(query)
        if self._latency > 0.0:
            time.sleep(self._latency)
        if self._error is not None:
            raise self._error
        if callable(self._responses) and not isinstance(self._responses, Mapping):
            return list(self._responses(query))
        return list(self._responses.get(query, []))
