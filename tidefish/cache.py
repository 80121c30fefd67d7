"""
Position score cache.

Maps a position fingerprint to the last score computed for it. Entries
carry no depth or window, so a reused score is an approximation; the
search only trusts entries that cannot raise alpha. Anything with the
`ScoreCache` shape can replace it, including a depth and bound aware
transposition table.
"""

from collections import OrderedDict
from typing import Protocol, runtime_checkable


@runtime_checkable
class ScoreCache(Protocol):
    def get(self, key: int) -> int | None: ...

    def put(self, key: int, score: int) -> None: ...

    def clear(self) -> None: ...

    def __len__(self) -> int: ...

    def __contains__(self, key: object) -> bool: ...


class LRUScoreCache:
    """
    Bounded score cache with least-recently-used eviction.

    Arguments:
        - max_entries: capacity; 0 turns the cache into a no-op.
    """

    def __init__(self, max_entries: int = 1 << 18):
        if max_entries < 0:
            raise ValueError(f"max_entries must not be negative, got {max_entries}")
        self.max_entries = max_entries
        self._scores: "OrderedDict[int, int]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._scores)

    def __contains__(self, key: object) -> bool:
        return key in self._scores

    def get(self, key: int) -> int | None:
        score = self._scores.get(key)
        if score is None:
            self.misses += 1
            return None
        self._scores.move_to_end(key)
        self.hits += 1
        return score

    def put(self, key: int, score: int) -> None:
        if not self.max_entries:
            return
        self._scores[key] = score
        self._scores.move_to_end(key)
        if len(self._scores) > self.max_entries:
            self._scores.popitem(last=False)  # oldest

    def clear(self) -> None:
        self._scores.clear()
        self.hits = 0
        self.misses = 0
