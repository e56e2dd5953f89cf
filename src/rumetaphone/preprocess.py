from typing import List, Optional

import regex as re

# Cyrillic uppercase block is А..Я; Ё sits outside that range
INVALID_SYMBOLS = re.compile(r"[^А-ЯЁ\s\-]")
UNUSED_SYMBOLS = re.compile(r"[ЬЪ]")
# \s here is Unicode whitespace, so a no-break space splits words.
# Keys built with an ASCII-only \s dropped it instead: "Иван\u00a0Петров"
# was ИВАНПИТР4 there and is ИВАН ПИТР4 here.
DELIMITERS = re.compile(r"[\s\-]+")


def clean_source(source: Optional[str]) -> Optional[str]:
    """
    Upper-case the source and drop everything except Cyrillic letters,
    whitespace and hyphens. Soft and hard signs are dropped too.
    Returns None when nothing is left.
    """
    if source is None:
        return None
    s = INVALID_SYMBOLS.sub("", source.strip().upper())
    s = UNUSED_SYMBOLS.sub("", s)
    return s or None


def tokenize(value: str) -> List[str]:
    # runs of spaces/hyphens count as one delimiter
    return [t for t in DELIMITERS.split(value) if t]
