# floorplan/cache.py
import hashlib
import json
import logging
import threading
from collections import OrderedDict
from typing import Any, Hashable, Optional, Tuple

from floorplan.model import FloorPlan
from floorplan.viewport import ViewportConfig

logger = logging.getLogger(__name__)


def plan_digest(plan: FloorPlan) -> str:
    """Content hash of a plan; equal plans hash equal regardless of object identity."""
    payload = json.dumps(plan.to_dict(), sort_keys=True, default=str)
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()


class SceneCache:
    """
    Bounded LRU of rendered scenes, owned and passed in by the caller.

    Keys are ``(plan_key, ViewportConfig)``. The colour function is not part
    of the key, so callers mixing colour functions should use separate caches.
    """

    def __init__(self, max_entries: int = 128):
        self.max_entries = max(1, int(max_entries))
        self._entries: "OrderedDict[Tuple[Hashable, ViewportConfig], Any]" = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def key_for(self, plan: FloorPlan, config: ViewportConfig,
                plan_key: Optional[Hashable] = None) -> Tuple[Hashable, ViewportConfig]:
        return (plan_key if plan_key is not None else plan_digest(plan), config)

    def get(self, key):
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self.hits += 1
                return self._entries[key]
            self.misses += 1
            return None

    def put(self, key, scene) -> None:
        with self._lock:
            self._entries[key] = scene
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted cached scene for %r", evicted[0])

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self):
        return len(self._entries)

    def __contains__(self, key):
        return key in self._entries
