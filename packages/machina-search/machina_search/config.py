"""Search widget configuration."""
from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class SearchConfig:
    """Immutable configuration for the image search widget.

    Attributes:
        feed_url: Public photo feed endpoint.
        lang: Feed language code.
        request_timeout: Socket timeout in seconds for one feed request.
        search_timeout: Seconds the widget waits in the searching state
            before giving up with an error.
        max_workers: Thread pool size for background searches.
        max_results: Upper bound on items kept from one response.
    """

    feed_url: str = "https://api.flickr.com/services/feeds/photos_public.gne"
    lang: str = "en-us"
    request_timeout: float = 10.0
    search_timeout: float = 15.0
    max_workers: int = 2
    max_results: int = 20

    def __post_init__(self) -> None:
        if self.search_timeout <= 0:
            raise ValueError("search_timeout must be positive")
        if self.max_workers <= 0:
            raise ValueError("max_workers must be positive")


def load_config(config_path: Path | str) -> SearchConfig:
    """Load a JSON configuration file into a SearchConfig."""
    config_path = config_path if isinstance(config_path, Path) else Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found at {config_path}")

    with config_path.open("r", encoding="utf-8") as stream:
        raw = json.load(stream)
    if not isinstance(raw, dict):
        raise ValueError("Configuration root must be a JSON object")

    known = {f.name for f in dataclasses.fields(SearchConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ValueError(f"Unknown configuration keys: {', '.join(unknown)}")
    return SearchConfig(**raw)
