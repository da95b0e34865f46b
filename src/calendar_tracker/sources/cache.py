import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from calendar_tracker.sources.base import EventSource, EventSourceError, TimeWindow

logger = logging.getLogger(__name__)


class CachedEventSource(EventSource):
    """
    JSON file cache in front of another event source.

    If the cache file exists, events are loaded from it and the delegate
    is never called; the requested window is not applied to cached data.
    Otherwise events are fetched from the delegate and stored in the file
    as {"items": [...]}, the shape the Calendar API returns.
    """

    def __init__(self, cache_file: Path, delegate: EventSource):
        self.cache_file = Path(cache_file)
        self.delegate = delegate

    def fetch_items(self, window: TimeWindow) -> List[Dict[str, Any]]:
        if self.cache_file.exists():
            return self._load()

        items = self.delegate.fetch_items(window)
        self._store(items)
        return items

    def _load(self) -> List[Dict[str, Any]]:
        """
        Read cached event resources.

        Raises:
            EventSourceError: If the file cannot be read or has the wrong shape
        """
        try:
            with open(self.cache_file, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise EventSourceError(f"Unable to read event cache '{self.cache_file}': {e}") from e

        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise EventSourceError(f"Event cache '{self.cache_file}' has no 'items' list")
        for position, item in enumerate(items):
            if not isinstance(item, dict):
                raise EventSourceError(
                    f"Event cache '{self.cache_file}' item {position} is not an event object: {item!r}"
                )

        logger.info(f"Loaded {len(items)} events from cache '{self.cache_file}'")
        return items

    def _store(self, items: List[Dict[str, Any]]) -> None:
        try:
            self.cache_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.cache_file, "w", encoding="utf-8") as f:
                json.dump({"items": items}, f, indent=2)
        except OSError as e:
            raise EventSourceError(f"Unable to write event cache '{self.cache_file}': {e}") from e

        logger.debug(f"Stored {len(items)} events in cache '{self.cache_file}'")

    def __repr__(self) -> str:
        return f"CachedEventSource('{self.cache_file}', {self.delegate!r})"
