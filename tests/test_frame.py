"""Tests for matching over DataFrame columns."""

import pandas as pd
import pytest

from ahomatch import Automaton
from ahomatch.frame import add_match_columns, match_frame


@pytest.fixture
def ac():
    return Automaton.build(["he", "she", "his", "hers"])


@pytest.fixture
def docs():
    return pd.DataFrame({"ID": [10, 11, 12], "TEXT": ["ushers", None, "his hers"]})


def test_add_match_columns(ac, docs):
    out = add_match_columns(docs, ac, "TEXT")
    assert out["_KW_HAS_MATCH"].tolist() == [1, 0, 1]
    assert out["_KW_COUNT"].tolist() == [3, 0, 3]
    assert set(out.loc[0, "_KW_TERMS"].split("|")) == {"she", "he", "hers"}
    assert out.loc[1, "_KW_TERMS"] == ""
    assert out.loc[2, "_KW_TERMS"] == "his|he|hers"
    # input untouched
    assert list(docs.columns) == ["ID", "TEXT"]


def test_add_match_columns_prefix(ac, docs):
    out = add_match_columns(docs, ac, "TEXT", prefix="_AC")
    assert {"_AC_HAS_MATCH", "_AC_TERMS", "_AC_COUNT"} <= set(out.columns)


def test_add_match_columns_missing_column(ac, docs):
    with pytest.raises(KeyError):
        add_match_columns(docs, ac, "DESCRIPTION")


def test_match_frame(ac, docs):
    hits = match_frame(docs, ac, "TEXT")
    assert list(hits.columns) == ["row", "keyword", "start", "end"]
    got = sorted(map(tuple, hits.itertuples(index=False, name=None)))
    assert got == [
        (0, "he", 2, 4), (0, "hers", 2, 6), (0, "she", 1, 4),
        (2, "he", 4, 6), (2, "hers", 4, 8), (2, "his", 0, 3),
    ]


def test_match_frame_no_hits(ac):
    hits = match_frame(pd.DataFrame({"TEXT": ["xyz", ""]}), ac, "TEXT")
    assert hits.empty
    assert list(hits.columns) == ["row", "keyword", "start", "end"]
