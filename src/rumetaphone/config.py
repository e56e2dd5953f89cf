from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

log = logging.getLogger(__name__)

DEFAULT_FILTER_NAME = "ru_phonetic"


@dataclass
class FilterSettings:
    name: str = DEFAULT_FILTER_NAME
    # replace=False keeps the original token next to the encoded one
    replace: bool = True

    # Allow dict-like access in code that does settings.get("replace", True)
    def get(self, key: str, default=None):
        return getattr(self, key, default)


@dataclass
class Matching:
    fuzzy: Optional[int] = None


@dataclass
class Name:
    canonical: str
    variants: List[str] = field(default_factory=list)


@dataclass
class Config:
    filter: FilterSettings = field(default_factory=FilterSettings)
    matching: Matching = field(default_factory=Matching)
    names: List[Name] = field(default_factory=list)


def _as_str_list(x: Any) -> List[str]:
    if x is None:
        return []
    if isinstance(x, list):
        return [str(i) for i in x]
    # allow single string
    return [str(x)]


def _as_bool(x: Any, key: str) -> bool:
    if isinstance(x, bool):
        return x
    if isinstance(x, str) and x.strip().lower() in ("true", "false"):
        return x.strip().lower() == "true"
    raise ValueError(f"Config error: '{key}' must be a boolean, got {x!r}.")


def parse_config(raw: Any) -> Config:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValueError("Config error: top-level YAML must be a mapping (dict).")

    # ---- filter ----
    filter_raw = raw.get("filter", {}) or {}
    if not isinstance(filter_raw, dict):
        raise ValueError("Config error: 'filter' must be a mapping (dict).")
    filter_kw: Dict[str, Any] = {}
    if "name" in filter_raw:
        filter_kw["name"] = str(filter_raw["name"])
    if "replace" in filter_raw:
        filter_kw["replace"] = _as_bool(filter_raw["replace"], "replace")
    settings = FilterSettings(**filter_kw)

    # ---- matching ----
    matching_raw = raw.get("matching", {}) or {}
    if not isinstance(matching_raw, dict):
        raise ValueError("Config error: 'matching' must be a mapping (dict).")
    fuzzy = matching_raw.get("fuzzy", None)
    if fuzzy is not None:
        try:
            fuzzy = int(fuzzy)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Config error: 'fuzzy' must be an integer. Got: {fuzzy!r}") from e
        if not 0 <= fuzzy <= 100:
            raise ValueError(f"Config error: 'fuzzy' must be within 0..100. Got: {fuzzy}")

    # ---- names ----
    names_raw = raw.get("names", []) or []
    if not isinstance(names_raw, list):
        raise ValueError("Config error: 'names' must be a list.")

    names: List[Name] = []
    for n in names_raw:
        # allow a bare string as a name without variants
        if isinstance(n, str):
            n = {"canonical": n}
        if not isinstance(n, dict):
            raise ValueError(f"Config error: name entries must be dicts or strings, got {type(n)}.")
        canonical = n.get("canonical")
        if not canonical or not str(canonical).strip():
            raise ValueError(f"Config error: each name needs a 'canonical'. Problematic entry: {n}")
        names.append(Name(canonical=str(canonical), variants=_as_str_list(n.get("variants"))))

    return Config(filter=settings, matching=Matching(fuzzy=fuzzy), names=names)


def load_config(path: str) -> Config:
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    cfg = parse_config(raw)
    log.debug(
        "Loaded %s: filter=%s replace=%s names=%d",
        path,
        cfg.filter.name,
        cfg.filter.replace,
        len(cfg.names),
    )
    return cfg
