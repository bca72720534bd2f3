# metrics_tracker.py - running sums/counts for lookup latency and outcomes

import json
import logging
import os
import time
from collections import defaultdict
from contextlib import contextmanager
from typing import Iterator, Optional

from rich.console import Console
from rich.table import Table

logger = logging.getLogger(__name__)


class Metrics:
    """
    In-memory by default. Give it a path to persist after every record
    (same shape as before: {key: {"sum": .., "count": ..}}).
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.m = defaultdict(float)
        self.n = defaultdict(int)
        self.latest = {}
        self._load()

    def _load(self):
        if not self.path or not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf8") as f:
                d = json.load(f)
            for k, v in d.items():
                self.m[k] = float(v["sum"])
                self.n[k] = int(v["count"])
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("ignoring unreadable metrics %s: %s", self.path, e)
            self.m.clear()
            self.n.clear()

    def save(self):
        if not self.path:
            return
        d = {k: {"sum": self.m[k], "count": self.n[k]} for k in self.m}
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(d, f, indent=2)

    def record(self, key, val):
        self.m[key] += val
        self.latest[key] = val
        self.n[key] += 1
        self.save()

    def incr(self, key):
        self.record(key, 1)

    @contextmanager
    def timer(self, key) -> Iterator[None]:
        """Record elapsed seconds of the block under `key`, even if it raises."""
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.record(key, time.perf_counter() - t0)

    def count(self, key):
        return self.n.get(key, 0)

    def avg(self, key):
        if self.n.get(key, 0) == 0:
            return 0.0
        return self.m[key] / self.n[key]

    def last(self, key):
        return self.latest.get(key, 0.0)

    def show(self, console: Optional[Console] = None):
        table = Table(title="metrics")
        table.add_column("key")
        table.add_column("count", justify="right")
        table.add_column("avg", justify="right")
        for k in sorted(self.m):
            table.add_row(k, str(self.n[k]), f"{self.avg(k):.4f}")
        (console or Console()).print(table)
