# frame.py
"""Run an automaton over a text column of a DataFrame."""
import logging

import pandas as pd

from .ac import Automaton
from .normalize import cell_text

log = logging.getLogger(__name__)


def add_match_columns(df: pd.DataFrame, automaton: Automaton, text_col: str,
                      prefix: str = "_KW") -> pd.DataFrame:
    """Copy of ``df`` with per-row match summary columns appended.

    <prefix>_HAS_MATCH  0/1
    <prefix>_TERMS      distinct matched keywords, pipe-joined, in scan order
    <prefix>_COUNT      number of occurrences (overlaps included)
    """
    if text_col not in df.columns:
        raise KeyError(f"add_match_columns: no column {text_col!r}")

    has, terms, counts = [], [], []
    for v in df[text_col].tolist():
        kws = [kw for kw, _ in automaton.scan(cell_text(v))]
        has.append(int(bool(kws)))
        terms.append("|".join(dict.fromkeys(kws)))
        counts.append(len(kws))

    out = df.copy()
    out[f"{prefix}_HAS_MATCH"] = has
    out[f"{prefix}_TERMS"] = terms
    out[f"{prefix}_COUNT"] = counts
    log.debug("matched %d/%d rows of %r", sum(has), len(out), text_col)
    return out


def match_frame(df: pd.DataFrame, automaton: Automaton, text_col: str) -> pd.DataFrame:
    """Long format: one row per occurrence (row, keyword, start, end)."""
    if text_col not in df.columns:
        raise KeyError(f"match_frame: no column {text_col!r}")

    rows = []
    for idx, v in zip(df.index, df[text_col].tolist()):
        for h in automaton.finditer(cell_text(v)):
            rows.append({"row": idx, "keyword": h.keyword, "start": h.start, "end": h.end})
    return pd.DataFrame(rows, columns=["row", "keyword", "start", "end"])
