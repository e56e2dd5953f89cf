from dataclasses import dataclass
from typing import Iterator, List, Tuple

import regex as re
from rapidfuzz import fuzz

from .encoder import metaphone

# hyphenated surnames are two words, same as for the encoder
_WORD = re.compile(r"\p{Cyrillic}+")


@dataclass
class Hit:
    canonical: str
    key: str
    matched: str
    score: int
    start: int
    end: int


def key_width(key: str) -> int:
    return len(key.split(" ")) if key else 0


def word_windows(text: str, width: int) -> Iterator[Tuple[int, int]]:
    """Yield (start, end) of every run of `width` consecutive words."""
    if width <= 0:
        return
    spans = [(m.start(), m.end()) for m in _WORD.finditer(text or "")]
    for i in range(len(spans) - width + 1):
        yield spans[i][0], spans[i + width - 1][1]


def scan_phonetic(text: str, key: str, canonical: str) -> List[Hit]:
    hits = []
    for start, end in word_windows(text, key_width(key)):
        cand = text[start:end]
        if metaphone(cand) == key:
            hits.append(Hit(canonical, key, cand, 100, start, end))
    return hits


def scan_fuzzy(text: str, key: str, canonical: str, thresh: int) -> List[Hit]:
    # compares phonetic keys, not spellings
    hits = []
    for start, end in word_windows(text, key_width(key)):
        cand = text[start:end]
        score = fuzz.ratio(metaphone(cand), key)
        if score >= thresh:
            hits.append(Hit(canonical, key, cand, int(round(score)), start, end))
    return hits
