# normalize.py
from typing import List, Optional
import re
import pandas as pd
from pathlib import Path

KEYWORD_COLS = ["KEYWORD", "KEYWORDS", "TERM", "PATTERN"]
TABLE_SUFFIXES = {".csv", ".tsv"}

# ---------- IO ----------
def load_csv_any(path: Path, *, delimiter: Optional[str]=None, encoding: Optional[str]=None) -> pd.DataFrame:
    """Tolerant table loader: every cell read as text, no NA coercion.

    The delimiter follows the suffix (.csv comma, .tsv tab) and is sniffed for
    anything else unless given.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Required file not found: {path}")
    if delimiter is None:
        delimiter = {".csv": ",", ".tsv": "\t"}.get(path.suffix.lower())
    return pd.read_csv(
        path,
        sep=delimiter,
        encoding=encoding or "utf-8",
        engine="python",
        dtype=str,
        keep_default_na=False,
    )

# ---------- Columns / headers ----------
def _norm_col(s) -> str:
    return re.sub(r"[^\w\s]", "", str(s)).strip().upper().replace(" ", "_")

def pick_col(df: pd.DataFrame, candidates: List[str], *, must=False, label=""):
    """Pick the first existing column among candidate aliases (case/spacing tolerant)."""
    cmap = {_norm_col(c): c for c in df.columns}
    for cand in candidates:
        key = _norm_col(cand)
        if key in cmap:
            return cmap[key]
    if must:
        raise KeyError(f"[pick_col] Missing required column for {label}: tried {candidates}")
    return None

def cell_text(v) -> str:
    """Text of a table cell; missing/NaN cells are empty."""
    if v is None: return ""
    if not isinstance(v, str) and pd.isna(v): return ""
    return str(v)

# ---------- Keywords ----------
def read_keywords(path: Path, columns: Optional[List[str]]=None, *, encoding: Optional[str]=None) -> List[str]:
    """Keywords from a CSV/TSV column or a one-per-line text file.

    Blank entries are skipped; everything else is kept verbatim.
    """
    path = Path(path)
    if path.suffix.lower() in TABLE_SUFFIXES:
        df = load_csv_any(path, encoding=encoding)
        if columns:
            col = pick_col(df, columns, must=True, label="keywords")
        else:
            col = pick_col(df, KEYWORD_COLS) or df.columns[0]
        values = [cell_text(v) for v in df[col].tolist()]
    else:
        if not path.exists():
            raise FileNotFoundError(f"Required file not found: {path}")
        values = path.read_text(encoding=encoding or "utf-8").splitlines()
    return [v for v in values if v.strip()]
