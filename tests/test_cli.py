"""Tests for the command-line front end."""

import pandas as pd
import pytest

from ahomatch.cli import main

CLASSIC = ["-k", "he", "-k", "she", "-k", "his", "-k", "hers"]


def test_inline_keywords_and_string(capsys):
    assert main(CLASSIC + ["--string", "ushers"]) == 0
    out = capsys.readouterr().out
    assert "he at positions [2]" in out
    assert "hers at positions [2]" in out
    assert "she at positions [1]" in out
    assert "his" not in out


def test_chain_walk_mode(capsys):
    assert main(CLASSIC + ["--string", "ushers", "--no-delta"]) == 0
    assert "hers at positions [2]" in capsys.readouterr().out


def test_files_to_csv(tmp_path):
    kw = tmp_path / "kw.txt"
    kw.write_text("he\nher\nhers\n", encoding="utf-8")
    text = tmp_path / "in.txt"
    text.write_text("hers", encoding="utf-8")
    out = tmp_path / "res" / "hits.csv"

    assert main(["--keywords", str(kw), "--text", str(text), "--out", str(out)]) == 0
    df = pd.read_csv(out)
    assert df.to_dict("records") == [
        {"keyword": "he", "start": 0, "end": 2},
        {"keyword": "her", "start": 0, "end": 3},
        {"keyword": "hers", "start": 0, "end": 4},
    ]


def test_table_mode(tmp_path):
    kw = tmp_path / "terms.csv"
    kw.write_text("TERM\nhe\nshe\n", encoding="utf-8")
    table = tmp_path / "docs.csv"
    table.write_text("id,description\n1,ushers\n2,nothing\n", encoding="utf-8")
    out = tmp_path / "docs_kw.csv"

    assert main(["--keywords", str(kw), "--table", str(table),
                 "--text-col", "DESCRIPTION", "--out", str(out)]) == 0
    df = pd.read_csv(out, keep_default_na=False)
    assert df["_KW_HAS_MATCH"].tolist() == [1, 0]
    assert df["_KW_COUNT"].tolist() == [2, 0]


def test_empty_keyword_rejected():
    assert main(["-k", "", "--string", "abc"]) == 2


def test_missing_keyword_file(tmp_path):
    assert main(["--keywords", str(tmp_path / "nope.txt"), "--string", "abc"]) == 2


def test_missing_text_column(tmp_path):
    table = tmp_path / "docs.csv"
    table.write_text("id,body\n1,he\n", encoding="utf-8")
    assert main(["-k", "he", "--table", str(table), "--text-col", "TEXT"]) == 2


def test_keywords_required():
    with pytest.raises(SystemExit) as exc:
        main(["--string", "abc"])
    assert exc.value.code == 2


def test_malformed_table(tmp_path):
    table = tmp_path / "docs.csv"
    table.write_text("id,text\n1,he\n2,she,extra,fields\n", encoding="utf-8")
    assert main(["-k", "he", "--table", str(table), "--text-col", "TEXT"]) == 2


def test_undecodable_text(tmp_path):
    text = tmp_path / "in.txt"
    text.write_bytes(b"caf\xe9 he")
    assert main(["-k", "he", "--text", str(text)]) == 2


def test_unknown_encoding(tmp_path):
    text = tmp_path / "in.txt"
    text.write_text("he", encoding="utf-8")
    assert main(["-k", "he", "--text", str(text), "--encoding", "no-such-codec"]) == 2
