# crawler/frontier.py

# URLs waiting to be fetched, with the link depth they were found at.
# Visited URLs are tracked here too, but a URL only counts as visited once it
# is taken off the queue, so the same URL may sit in the queue more than once.

from collections import deque
from typing import Iterable, Optional, Tuple


class Frontier:
    """
    FIFO frontier for one traversal. Seeds enter at depth 1, discovered links
    at parent depth + 1, which keeps the walk breadth-first.
    """

    def __init__(self, seed_urls: Iterable[str] = ()):
        self.queue = deque()
        self.visited = set()
        for url in seed_urls:
            self.add_url(url, depth=1)

    def add_url(self, url: str, depth: int):
        self.queue.append((url, depth))

    def get_url(self) -> Optional[Tuple[str, int]]:
        """Next (url, depth) pair, or None when the frontier is exhausted."""
        if not self.queue:
            return None
        return self.queue.popleft()

    def has_pending(self) -> bool:
        return bool(self.queue)

    def has_visited(self, url: str) -> bool:
        return url in self.visited

    def mark_visited(self, url: str):
        self.visited.add(url)

    def __len__(self):
        return len(self.queue)
