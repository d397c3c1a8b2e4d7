#!/usr/bin/env python3
"""
Command-line front end for ahomatch.

Usage:
    ahomatch --keywords keywords.txt --text input.txt
    ahomatch -k he -k she -k his -k hers --string ushers
    ahomatch --keywords terms.csv --keyword-col TERM --table docs.csv --text-col DESCRIPTION --out docs_kw.csv
"""

import argparse
import logging
import sys
from pathlib import Path

import pandas as pd

from .ac import Automaton
from .errors import InvalidInput
from .frame import add_match_columns
from .normalize import load_csv_any, pick_col, read_keywords

DEFAULT_TEXT_COLS = ["TEXT", "DESCRIPTION", "CONTENT"]


def ensure_path_exists(p: Path):
    if not p.exists():
        raise FileNotFoundError(f"Required file not found: {p}")


def parse_args(argv=None):
    ap = argparse.ArgumentParser(prog="ahomatch", description="Find every occurrence of a set of keywords in a text.")
    ap.add_argument("--keywords", help="Keyword file: one per line, or a CSV/TSV column")
    ap.add_argument("-k", "--keyword", action="append", default=[], help="Inline keyword (repeatable)")
    ap.add_argument("--keyword-col", nargs="*", default=None, help="Candidate keyword columns for CSV keyword files")
    src = ap.add_mutually_exclusive_group(required=True)
    src.add_argument("--text", help="Text file to scan")
    src.add_argument("--string", help="Literal text to scan")
    src.add_argument("--table", help="CSV/TSV whose text column is scanned row by row")
    ap.add_argument("--text-col", nargs="*", default=DEFAULT_TEXT_COLS, help="Candidate text columns for --table")
    ap.add_argument("--out", help="Write CSV results here instead of printing")
    ap.add_argument("--no-delta", action="store_true", help="Skip the deterministic transition table")
    ap.add_argument("--encoding", default="utf-8")
    ap.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    args = ap.parse_args(argv)
    if not args.keywords and not args.keyword:
        ap.error("at least one of --keywords or --keyword is required")
    return args


def load_keywords(args):
    kws = list(args.keyword)
    if args.keywords:
        path = Path(args.keywords)
        ensure_path_exists(path)
        kws.extend(read_keywords(path, args.keyword_col, encoding=args.encoding))
    logging.debug("Loaded %d keywords", len(kws))
    return kws


def run_table(args, ac: Automaton):
    df = load_csv_any(Path(args.table), encoding=args.encoding)
    col = pick_col(df, args.text_col, must=True, label="text")
    logging.info("Scanning %s rows of column %s", f"{len(df):,}", col)
    out = add_match_columns(df, ac, col)
    if args.out:
        Path(args.out).parent.mkdir(parents=True, exist_ok=True)
        out.to_csv(args.out, index=False)
        print(f"✅ Match columns added -> {args.out}  (rows={len(out):,})")
    else:
        print(out.to_string(index=False))


def run_text(args, ac: Automaton):
    if args.text is not None:
        path = Path(args.text)
        ensure_path_exists(path)
        text = path.read_text(encoding=args.encoding)
    else:
        text = args.string
    logging.info("Scanning %s characters", f"{len(text):,}")
    locs = ac.match(text)
    if args.out:
        Path(args.out).parent.mkdir(parents=True, exist_ok=True)
        hits = locs.to_frame()
        hits.to_csv(args.out, index=False)
        print(f"✅ Matches -> {args.out} | rows={len(hits):,}")
    elif locs:
        print(locs.format())
    else:
        logging.info("No keyword found")


def main(argv=None) -> int:
    args = parse_args(argv)

    # logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")

    try:
        kws = load_keywords(args)
        ac = Automaton.build(kws, deterministic=not args.no_delta)
        logging.info("Built automaton: %d keywords, %d states", len(ac.keywords), ac.state_count)
        if args.table is not None:
            run_table(args, ac)
        else:
            run_text(args, ac)
    except (InvalidInput, FileNotFoundError, LookupError, UnicodeDecodeError,
            pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        logging.error("%s", exc)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
