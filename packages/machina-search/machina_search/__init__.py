"""machina-search - Image feed search widget driven by a machina statechart."""
from __future__ import annotations

from machina_search.chart import SEARCH_TIMEOUT_EVENT, search_chart, search_definition
from machina_search.config import SearchConfig, load_config
from machina_search.feed import (
    FeedClient,
    FeedError,
    FeedItem,
    MockFeedClient,
    PublicFeedClient,
    parse_feed,
)
from machina_search.logs import configure_logging
from machina_search.service import SearchService
from machina_search.widget import SearchWidget

__all__ = [
    "FeedClient",
    "FeedError",
    "FeedItem",
    "MockFeedClient",
    "PublicFeedClient",
    "SEARCH_TIMEOUT_EVENT",
    "SearchConfig",
    "SearchService",
    "SearchWidget",
    "configure_logging",
    "load_config",
    "parse_feed",
    "search_chart",
    "search_definition",
]
