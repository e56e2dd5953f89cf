"""
Russian metaphone: encodes Cyrillic names so that spelling variants which
sound alike share one key.

    >>> encode("Спиридонова маргарита афанасьевна")
    'СПИРИДАН9 МАРГАРИТА АФАНАС!'
    >>> encode("спередонова моргорита офонасевна")
    'СПИРИДАН9 МАРГАРИТА АФАНАС!'

The pipeline per call:
  - upper-case, strip non-Cyrillic symbols and the soft/hard signs
  - split into words on whitespace and hyphens
  - fold surname/patronymic suffixes into one sentinel symbol
  - reduce vowels to И/А/У
  - devoice a trailing voiced consonant
  - drop repeated letters, devoice consonants not followed by a vowel/sonorant

Everything here is a pure function over the read-only tables in
``rumetaphone.rules``; the encoder may be shared freely between threads.
"""
from typing import Any, Optional

from .preprocess import clean_source, tokenize
from .rules import (
    DEVOICING_SUFFIX_RULES,
    SUFFIX_RULES,
    VOWELS_AND_SONORANTS,
    devoice,
    replace_suffix,
    replace_vowels,
)

NOT_A_STRING = "Russian metaphone encode parameter is not of type String"


class EncoderException(Exception):
    pass


class InvalidInputError(EncoderException, TypeError):
    """Raised when something other than a str is passed to encode()."""


def collapse_chars(token: str) -> str:
    out = []
    n = len(token)
    for j, current in enumerate(token):
        prev = token[j - 1] if j > 0 else None
        nxt = token[j + 1] if j < n - 1 else None
        if current == prev:
            continue
        if nxt in VOWELS_AND_SONORANTS:
            out.append(current)
            continue
        # compare the devoiced char: "ТД" collapses to "Т"
        current = devoice(current)
        if current != prev:
            out.append(current)
    return "".join(out)


def encode_token(token: str) -> str:
    folded = replace_suffix(token, SUFFIX_RULES)
    reduced = replace_vowels(folded)
    return collapse_chars(replace_suffix(reduced, DEVOICING_SUFFIX_RULES))


def metaphone(source: Optional[str]) -> str:
    value = clean_source(source)
    if value is None:
        return ""
    tokens = tokenize(value)
    result = []
    for i, token in enumerate(tokens):
        result.append(encode_token(token))
        if i != len(tokens) - 1:
            result.append(" ")
    return "".join(result).strip()


def encode(value: Any) -> str:
    if not isinstance(value, str):
        raise InvalidInputError(NOT_A_STRING)
    return metaphone(value)


class RuMetaphoneEncoder:
    """
    String encoder object for filters and other code that expects an
    ``encode(value)`` method. Holds no state of its own.
    """

    def encode(self, value: Any) -> str:
        return encode(value)

    def metaphone(self, source: Optional[str]) -> str:
        return metaphone(source)

    def __call__(self, value: Any) -> str:
        return encode(value)
