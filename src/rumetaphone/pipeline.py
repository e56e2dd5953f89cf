# src/rumetaphone/pipeline.py
from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Set, Tuple

from .config import Config, load_config
from .encoder import metaphone
from .matchers import Hit, scan_fuzzy, scan_phonetic

log = logging.getLogger(__name__)

Bank = Dict[str, List[str]]


def build_bank(cfg: Config) -> Bank:
    """
    Map every phonetic key to the canonical names that produce it.
    A canonical name contributes its own key plus the keys of its variants.
    """
    bank: Bank = {}
    for name in cfg.names:
        for spelling in [name.canonical, *name.variants]:
            key = metaphone(spelling)
            if not key:
                log.warning("Spelling %r of %r has no phonetic content, skipped", spelling, name.canonical)
                continue
            canon = bank.setdefault(key, [])
            if name.canonical not in canon:
                canon.append(name.canonical)
    log.debug("Built phonetic bank: %d keys for %d names", len(bank), len(cfg.names))
    return bank


def build_name_bank(cfg_path: str) -> Tuple[Config, Bank]:
    """
    Returns:
      cfg, bank
    """
    cfg = load_config(cfg_path)
    return cfg, build_bank(cfg)


def lookup(name: str, bank: Bank) -> List[str]:
    """Canonical names that sound like `name`."""
    return list(bank.get(metaphone(name), []))


def process_text(text: str, cfg: Config, bank: Bank) -> Dict[str, Any]:
    """
    Emits:
      - matches: canonical names found in the text, by first appearance
      - spans: [{matched, span, key, source, score}]
    Exact phonetic hits score 100; fuzzy hits (only with matching.fuzzy set)
    are reported for spans not already matched exactly, at most one per
    name and span.
    """
    hits: List[Hit] = []
    exact: Set[Tuple[str, int, int]] = set()

    for key, canonicals in bank.items():
        for canon in canonicals:
            for h in scan_phonetic(text or "", key, canon):
                exact.add((canon, h.start, h.end))
                hits.append(h)

    thresh = cfg.matching.fuzzy
    if thresh is not None:
        # one fuzzy hit per name and span: the best-scoring spelling wins
        fuzzy: Dict[Tuple[str, int, int], Hit] = {}
        for key, canonicals in bank.items():
            for canon in canonicals:
                for h in scan_fuzzy(text or "", key, canon, thresh):
                    at = (canon, h.start, h.end)
                    if at in exact:
                        continue
                    if at not in fuzzy or h.score > fuzzy[at].score:
                        fuzzy[at] = h
        hits.extend(fuzzy.values())

    hits.sort(key=lambda h: (h.start, -h.score, h.end))
    matches: List[str] = []
    spans: List[Dict[str, Any]] = []
    for h in hits:
        if h.canonical not in matches:
            matches.append(h.canonical)
        d = asdict(h)
        spans.append(
            {
                "matched": d["matched"],
                "span": (d["start"], d["end"]),
                "key": d["key"],
                "source": d["canonical"],
                "score": d["score"],
            }
        )
    return {"matches": matches, "spans": spans}
