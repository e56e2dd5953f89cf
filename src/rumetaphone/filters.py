"""
Token-stream side of the encoder.

``PhoneticFilter`` turns a stream of tokens into phonetic tokens. With
``replace=True`` every token is swapped for its key; with ``replace=False``
the key is injected right after the original token at the same position,
so an index can be searched both ways.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace as dc_replace
from typing import Any, Callable, Dict, Iterable, Iterator, Mapping, Optional

import regex as re

from .config import DEFAULT_FILTER_NAME
from .encoder import RuMetaphoneEncoder

log = logging.getLogger(__name__)

_WORD = re.compile(r"\S+")


@dataclass(frozen=True)
class Token:
    text: str
    start: int = 0
    end: int = 0
    # 0 means "same position as the previous token"
    position_increment: int = 1


def tokens_from_text(text: str) -> Iterator[Token]:
    for m in _WORD.finditer(text or ""):
        yield Token(m.group(0), m.start(), m.end())


class PhoneticFilter:
    def __init__(self, encoder: Optional[RuMetaphoneEncoder] = None, replace: bool = True):
        self.encoder = encoder or RuMetaphoneEncoder()
        self.replace = replace

    def __call__(self, tokens: Iterable[Token]) -> Iterator[Token]:
        return self.filter(tokens)

    def filter(self, tokens: Iterable[Token]) -> Iterator[Token]:
        for tok in tokens:
            if not tok.text:
                yield tok
                continue
            phonetic = self.encoder.encode(tok.text)
            if not phonetic or phonetic == tok.text:
                yield tok
                continue
            if self.replace:
                yield dc_replace(tok, text=phonetic)
            else:
                yield tok
                yield dc_replace(tok, text=phonetic, position_increment=0)

    def terms(self, text: str) -> list[str]:
        return [t.text for t in self.filter(tokens_from_text(text))]


FilterFactory = Callable[[Mapping[str, Any]], PhoneticFilter]


def _phonetic_factory(settings: Mapping[str, Any]) -> PhoneticFilter:
    return PhoneticFilter(replace=bool(settings.get("replace", True)))


FILTERS: Dict[str, FilterFactory] = {DEFAULT_FILTER_NAME: _phonetic_factory}


def create_filter(name: str = DEFAULT_FILTER_NAME, settings: Optional[Mapping[str, Any]] = None) -> PhoneticFilter:
    try:
        factory = FILTERS[name]
    except KeyError:
        raise ValueError(f"Unknown token filter: {name!r}. Known: {', '.join(sorted(FILTERS))}") from None
    f = factory(settings or {})
    log.debug("Created token filter %s (replace=%s)", name, f.replace)
    return f
