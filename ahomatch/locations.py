# locations.py
"""Keyword -> start offsets, built from the matcher's end-position events."""
from collections.abc import Mapping
from typing import Dict, Iterable, Iterator, List, Set, Tuple

import pandas as pd


class KeywordLocations(Mapping):
    """Read-only mapping from keyword to the set of offsets where it starts.

    Keys iterate in lexicographic order. Positions are deduplicated, so
    recording the same occurrence twice has no effect.
    """

    __slots__ = ("_starts",)

    def __init__(self):
        self._starts: Dict[str, Set[int]] = {}

    def add_location(self, output: Iterable[str], i: int) -> None:
        """Record every keyword in ``output`` as ending at text index ``i``."""
        for kw in output:
            self._starts.setdefault(kw, set()).add(i - len(kw) + 1)

    # ---- Mapping ----
    def __getitem__(self, keyword: str) -> Set[int]:
        return self._starts[keyword]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._starts))

    def __len__(self) -> int:
        return len(self._starts)

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {sorted(self._starts[k])}" for k in self)
        return f"KeywordLocations({{{body}}})"

    # ---- presentation ----
    def positions(self, keyword: str) -> List[int]:
        return sorted(self._starts.get(keyword, ()))

    def to_frame(self) -> pd.DataFrame:
        rows = [
            {"keyword": kw, "start": st, "end": st + len(kw)}
            for kw in self
            for st in self.positions(kw)
        ]
        return pd.DataFrame(rows, columns=["keyword", "start", "end"])

    def format(self) -> str:
        return "\n".join(f"{kw} at positions {self.positions(kw)}" for kw in self)


def aggregate(events: Iterable[Tuple[str, int]]) -> KeywordLocations:
    """Fold ``(keyword, end_index)`` events into a fresh KeywordLocations."""
    locs = KeywordLocations()
    for kw, i in events:
        locs.add_location((kw,), i)
    return locs
