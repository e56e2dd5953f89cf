import argparse
import json
import logging
import sys
from typing import List, Optional

import pandas as pd

from .config import load_config
from .encoder import metaphone
from .filters import create_filter
from .pipeline import build_name_bank, process_text

log = logging.getLogger(__name__)


def _detect_sep(path: str) -> str:
    """
    Heuristic: prefer tab if tabs appear in the header; otherwise comma.
    """
    try:
        with open(path, "rb") as fh:
            head = fh.read(2048).decode("utf-8", errors="ignore")
    except OSError:
        # let pandas report the real problem
        return ","
    header = head.splitlines()[0] if head else ""
    return "\t" if "\t" in header else ","


def _read_table(path_in: str, sep_arg: str) -> pd.DataFrame:
    if sep_arg == "csv":
        sep = ","
    elif sep_arg == "tsv":
        sep = "\t"
    else:  # auto
        sep = _detect_sep(path_in)
    return pd.read_csv(path_in, sep=sep, dtype=str, keep_default_na=False)


def _write(df: pd.DataFrame, out_path: Optional[str]) -> None:
    if out_path in (None, "-"):
        df.to_csv(sys.stdout, index=False)
    else:
        df.to_csv(out_path, index=False)


def encode_frame(df: pd.DataFrame, column: str, replace: bool = False) -> pd.DataFrame:
    if column not in df.columns:
        raise SystemExit(f"Input must contain column: {column}")
    if column == "phonetic" and not replace:
        raise SystemExit("Column 'phonetic' holds the keys; pass --replace to encode it in place")
    out = df.copy()
    keys = out[column].map(lambda v: metaphone(str(v)))
    if replace:
        out[column] = keys
    elif "phonetic" in out.columns:
        # re-encoding an earlier output: refresh the keys where they are
        out["phonetic"] = keys
    else:
        out.insert(out.columns.get_loc(column) + 1, "phonetic", keys)
    return out


def run_encode(path_in: str, column: str, out_path: Optional[str] = "-", sep_arg: str = "auto", replace: bool = False):
    df = _read_table(path_in, sep_arg)
    out = encode_frame(df, column, replace=replace)
    log.info("Encoded %d rows of column %r", len(out), column)
    _write(out, out_path)


def run_match(path_in: str, cfg_path: str, out_path: Optional[str] = "-", sep_arg: str = "auto"):
    cfg, bank = build_name_bank(cfg_path)

    df = _read_table(path_in, sep_arg)
    if "text" not in df.columns:
        raise SystemExit("Input must contain column: text")

    rows = []
    for idx, r in df.iterrows():
        res = process_text(str(r["text"]), cfg, bank)
        row = {"id": r["id"] if "id" in df.columns else idx}
        # Spans as JSON string for safe CSV embedding
        row["matches"] = json.dumps(res["matches"], ensure_ascii=False)
        row["spans"] = json.dumps(res["spans"], ensure_ascii=False)
        rows.append(row)

    log.info("Matched %d rows against %d phonetic keys", len(rows), len(bank))
    _write(pd.DataFrame(rows, columns=["id", "matches", "spans"]), out_path)


def run_analyze(path_in: str, cfg_path: str, out_path: Optional[str] = "-", sep_arg: str = "auto"):
    cfg = load_config(cfg_path)
    token_filter = create_filter(cfg.filter.name, cfg.filter)

    df = _read_table(path_in, sep_arg)
    if "text" not in df.columns:
        raise SystemExit("Input must contain column: text")

    rows = []
    for idx, r in df.iterrows():
        terms = token_filter.terms(str(r["text"]))
        rows.append(
            {
                "id": r["id"] if "id" in df.columns else idx,
                "terms": json.dumps(terms, ensure_ascii=False),
            }
        )

    log.info("Analyzed %d rows with %s (replace=%s)", len(rows), cfg.filter.name, token_filter.replace)
    _write(pd.DataFrame(rows, columns=["id", "terms"]), out_path)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="rumetaphone", description="Russian metaphone CLI")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
    sub = p.add_subparsers(dest="command", required=True)

    enc = sub.add_parser("encode", help="Add phonetic keys for a column of names")
    enc.add_argument("--in", dest="path_in", required=True, help="Input CSV/TSV")
    enc.add_argument("--column", default="name", help="Column to encode (default: name)")
    enc.add_argument("--replace", action="store_true", help="Overwrite the column instead of adding 'phonetic'")

    m = sub.add_parser("match", help="Find configured names in a 'text' column")
    m.add_argument("--in", dest="path_in", required=True, help="Input CSV/TSV with a text column")
    m.add_argument("--config", required=True, help="YAML config with names")

    an = sub.add_parser("analyze", help="Run the configured token filter over a 'text' column")
    an.add_argument("--in", dest="path_in", required=True, help="Input CSV/TSV with a text column")
    an.add_argument("--config", required=True, help="YAML config with a filter section")

    for sp in (enc, m, an):
        sp.add_argument("--out", dest="out_path", default="-", help="Output CSV path (use '-' for stdout)")
        sp.add_argument("--sep", dest="sep", default="auto", choices=["auto", "csv", "tsv"], help="Input delimiter")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    a = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if a.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if a.command == "encode":
        run_encode(a.path_in, a.column, a.out_path, a.sep, a.replace)
    elif a.command == "analyze":
        run_analyze(a.path_in, a.config, a.out_path, a.sep)
    else:
        run_match(a.path_in, a.config, a.out_path, a.sep)
    return 0


if __name__ == "__main__":
    sys.exit(main())
