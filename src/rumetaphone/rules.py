"""
Pattern tables for the Russian metaphone.

All tables are built once at import time and are never mutated afterwards,
which is what makes the encoder safe to share between threads. Order of the
rules is significant: suffix tables are first-match-wins, the vowel table is
applied cumulatively. Both kinds are stored as tuples, never as dicts.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

import regex as re


@dataclass(frozen=True)
class PatternRule:
    pattern: re.Pattern
    replacement: str


def _rules(*pairs: Tuple[str, str]) -> Tuple[PatternRule, ...]:
    return tuple(PatternRule(re.compile(p), r) for p, r in pairs)


# Surname and patronymic suffixes, longest first.
SUFFIX_RULES: Tuple[PatternRule, ...] = _rules(
    (r"(ОВСКИЙ)$", "@"),
    (r"(ЕВСКИЙ)$", "#"),
    (r"(ОВСКАЯ)$", "$"),
    (r"(ЕВСКАЯ)$", "%"),
    # patronymics
    (r"(ЕВИЧ)$", "?"),
    (r"(ОВИЧ)$", "?"),
    (r"(ЕВНА)$", "!"),
    (r"(ОВНА)$", "!"),
    (r"(ИЕВА)$", "9"),
    (r"(ЕЕВА)$", "9"),
    (r"(ОВА)$", "9"),
    (r"(ЕВА)$", "9"),
    (r"(ИЕВ)$", "4"),
    (r"(ЕЕВ)$", "4"),
    (r"(НКО)$", "3"),
    (r"(УК)$", "0"),
    (r"(ЮК)$", "0"),
    (r"(ИНА)$", "1"),
    (r"(ИК)$", "2"),
    (r"(ЕК)$", "2"),
    (r"(ОВ)$", "4"),
    (r"(ЕВ)$", "4"),
    (r"(ЫХ)$", "5"),
    (r"(ИХ)$", "5"),
    (r"(АЯ)$", "6"),
    # never reached: shadowed by the rules above, kept so existing keys stay stable
    (r"(АЯ)$", "7"),
    (r"(ИК)$", "7"),
    (r"(ИН)$", "8"),
)

# Digraphs go first, otherwise the single-letter rules would split them.
VOWEL_RULES: Tuple[PatternRule, ...] = _rules(
    (r"(ИО)|(ЙО)|(ИЕ)|(ЙЕ)", "И"),
    (r"[ОЫЯ]", "А"),
    (r"[Ю]", "У"),
    (r"[ЕЁЭ]", "И"),
)

DEVOICING_SUFFIX_RULES: Tuple[PatternRule, ...] = _rules(
    (r"Б$", "П"),
    (r"В$", "Ф"),
    (r"Г$", "К"),
    (r"Д$", "Т"),
    (r"З$", "С"),
)

DEVOICING_CHARS: Mapping[str, str] = MappingProxyType(
    {"Б": "П", "В": "Ф", "Г": "К", "Д": "Т", "З": "С"}
)

# A following vowel or sonorant keeps the consonant voiced.
VOWELS_AND_SONORANTS = frozenset("АУИЛМН")


def replace_suffix(source: str, rules: Tuple[PatternRule, ...]) -> str:
    """Replace the tail matched by the first matching rule; at most one rule fires."""
    for rule in rules:
        m = rule.pattern.search(source)
        if m:
            return source[: m.start()] + rule.replacement + source[m.end() :]
    return source


def replace_vowels(source: str, rules: Tuple[PatternRule, ...] = VOWEL_RULES) -> str:
    """Apply every rule in turn, each one to the output of the previous."""
    result = source
    for rule in rules:
        # callable repl keeps replacements literal
        result = rule.pattern.sub(lambda _m, r=rule.replacement: r, result)
    return result


def devoice(ch: str) -> str:
    return DEVOICING_CHARS.get(ch, ch)
