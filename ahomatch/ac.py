# ac.py
"""
Aho–Corasick pattern matching machine.

Construction is a strict pipeline:

    build_goto -> build_failure_and_merge_output -> build_delta

each phase consuming the tables returned by the previous one. The finished
``Automaton`` is read-only and can be shared between threads.
"""
import logging
from collections import deque
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from .errors import InvalidInput
from .locations import KeywordLocations, aggregate

log = logging.getLogger(__name__)

ROOT = 0

Goto = List[Dict[str, int]]          # state -> {symbol: next state}; a missing key means "no edge"
Output = List[FrozenSet[str]]        # state -> keywords ending there
Failure = List[int]                  # state -> failure state; failure[ROOT] == ROOT
Delta = List[Dict[str, int]]         # state -> {symbol: next state}; missing key means ROOT


@dataclass(frozen=True)
class Hit:
    start: int
    end: int          # exclusive
    keyword: str


def _normalize_keywords(keywords: Sequence[str]) -> List[str]:
    """Validate and dedupe, keeping first-seen order."""
    if isinstance(keywords, str):
        raise InvalidInput("keywords must be a sequence of strings, not a single string")
    kws = list(keywords)
    if not kws:
        raise InvalidInput("keyword list is empty")
    for k in kws:
        if not isinstance(k, str):
            raise InvalidInput(f"keyword {k!r} is not a string")
        if not k:
            raise InvalidInput("keyword list contains an empty string")
    return list(dict.fromkeys(kws))


# ---- 1) goto -----------------------------------------------------------------
def build_goto(keywords: Sequence[str]) -> Tuple[Goto, Output, int]:
    """Insert every distinct keyword into a shared-prefix trie.

    Returns ``(goto, output, state_count)``. States are numbered in creation
    order starting at the root (0).
    """
    return _insert_all(_normalize_keywords(keywords))


def _insert_all(kws: Sequence[str]) -> Tuple[Goto, Output, int]:
    goto: Goto = [dict()]
    out: List[List[str]] = [[]]
    for kw in kws:
        s = ROOT
        j = 0
        # follow the existing prefix; bounded by len(kw)
        while j < len(kw) and kw[j] in goto[s]:
            s = goto[s][kw[j]]
            j += 1
        for ch in kw[j:]:
            goto[s][ch] = len(goto)
            goto.append(dict())
            out.append([])
            s = goto[s][ch]
        out[s].append(kw)

    return goto, [frozenset(o) for o in out], len(goto)


# ---- 2) failure + output -----------------------------------------------------
def build_failure_and_merge_output(goto: Goto, output: Output) -> Tuple[Failure, Output]:
    """Compute failure links breadth-first and close outputs over them.

    ``output`` is not modified; the merged copy is returned with the failure
    table.
    """
    fail: Failure = [ROOT] * len(goto)
    merged: Output = list(output)

    q = deque()
    for s in goto[ROOT].values():
        fail[s] = ROOT
        q.append(s)

    while q:
        r = q.popleft()
        for ch, s in goto[r].items():
            f = fail[r]
            while f != ROOT and ch not in goto[f]:
                f = fail[f]
            fail[s] = goto[f].get(ch, ROOT)
            # fail[s] is shallower, so its set is already final
            merged[s] = merged[s] | merged[fail[s]]
            q.append(s)

    return fail, merged


# ---- 3) deterministic transitions -------------------------------------------
def build_delta(goto: Goto, failure: Failure) -> Delta:
    """Precompute the total transition function over the keyword alphabet.

    Entries that lead back to the root are not stored; look them up with
    ``delta[state].get(symbol, ROOT)``. Symbols outside the alphabet have no
    goto edge anywhere, so they always lead to the root.
    """
    alphabet = sorted({ch for edges in goto for ch in edges})
    delta: Delta = [dict() for _ in goto]

    q = deque()
    for ch in alphabet:
        s = goto[ROOT].get(ch, ROOT)
        if s != ROOT:
            delta[ROOT][ch] = s
            q.append(s)

    while q:
        r = q.popleft()
        fr = delta[failure[r]]
        row = delta[r]
        for ch in alphabet:
            s = goto[r].get(ch)
            if s is not None:
                row[ch] = s
                q.append(s)
            else:
                nxt = fr.get(ch, ROOT)
                if nxt != ROOT:
                    row[ch] = nxt

    log.debug("delta built: alphabet=%d entries=%d", len(alphabet), sum(len(d) for d in delta))
    return delta


# ---- automaton ---------------------------------------------------------------
_BUILD_KEY = object()


class Automaton:
    """Build-once, match-many multi-keyword matcher.

    Usage:
        ac = Automaton.build(["he", "she", "his", "hers"])
        ac.match("ushers")   # KeywordLocations({'he': [2], 'hers': [2], 'she': [1]})

    Instances come only from ``build``; the constructor refuses direct calls.
    """

    __slots__ = ("_keywords", "_goto", "_output", "_failure", "_delta")

    def __init__(self, keywords: Tuple[str, ...], goto: Goto, output: Output,
                 failure: Failure, delta: Optional[Delta], *, _key=None):
        if _key is not _BUILD_KEY:
            raise TypeError("use Automaton.build(keywords) to create an automaton")
        self._keywords = keywords
        self._goto = tuple(MappingProxyType(row) for row in goto)
        self._output = tuple(output)
        self._failure = tuple(failure)
        self._delta = tuple(MappingProxyType(row) for row in delta) if delta is not None else None

    @classmethod
    def build(cls, keywords: Sequence[str], deterministic: bool = True) -> "Automaton":
        """Run the whole construction pipeline; raises InvalidInput on bad keywords."""
        kws = tuple(_normalize_keywords(keywords))
        goto, output, n_states = _insert_all(kws)
        failure, output = build_failure_and_merge_output(goto, output)
        delta = build_delta(goto, failure) if deterministic else None
        log.debug("automaton built: keywords=%d states=%d deterministic=%s",
                  len(kws), n_states, deterministic)
        return cls(kws, goto, output, failure, delta, _key=_BUILD_KEY)

    # ---- read-only views ----
    @property
    def keywords(self) -> Tuple[str, ...]:
        return self._keywords

    @property
    def state_count(self) -> int:
        return len(self._goto)

    @property
    def goto(self) -> Tuple[Mapping[str, int], ...]:
        return self._goto

    @property
    def failure(self) -> Tuple[int, ...]:
        return self._failure

    @property
    def delta(self) -> Optional[Tuple[Mapping[str, int], ...]]:
        return self._delta

    @property
    def deterministic(self) -> bool:
        return self._delta is not None

    def output(self, state: int) -> FrozenSet[str]:
        return self._output[state]

    def __len__(self) -> int:
        return len(self._goto)

    def __contains__(self, keyword) -> bool:
        return keyword in self._keywords

    def __repr__(self) -> str:
        return f"Automaton(keywords={len(self._keywords)}, states={len(self._goto)}, deterministic={self.deterministic})"

    # ---- matching ----
    def next_state(self, state: int, symbol: str) -> int:
        """One transition: delta lookup, or goto/failure walk without delta."""
        if self._delta is not None:
            return self._delta[state].get(symbol, ROOT)
        goto, fail = self._goto, self._failure
        while state != ROOT and symbol not in goto[state]:
            state = fail[state]
        return goto[state].get(symbol, ROOT)

    def scan(self, text: str) -> Iterator[Tuple[str, int]]:
        """Yield ``(keyword, end_index)`` for every occurrence, left to right."""
        out = self._output
        s = ROOT
        if self._delta is not None:
            delta = self._delta
            for i, ch in enumerate(text):
                s = delta[s].get(ch, ROOT)
                if out[s]:
                    for kw in out[s]:
                        yield kw, i
        else:
            step = self.next_state
            for i, ch in enumerate(text):
                s = step(s, ch)
                if out[s]:
                    for kw in out[s]:
                        yield kw, i

    def finditer(self, text: str) -> Iterable[Hit]:
        for kw, i in self.scan(text):
            yield Hit(i - len(kw) + 1, i + 1, kw)

    def match(self, text: str) -> KeywordLocations:
        """All occurrences of every keyword, as keyword -> set of start offsets."""
        return aggregate(self.scan(text))
