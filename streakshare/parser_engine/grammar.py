"""
Grammar Engine.

Applies one game's extraction patterns to the shared text. The cleaned
variant (decorative glyphs stripped) is tried first, the raw text second.
The first pattern that matches wins; otherwise UnparseableShare is raised.

Every pattern is a bounded header regex followed by independent forward
searches for its fields, so extraction stays linear in the input length.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Mapping, Optional, Tuple

from .errors import UnparseableShare
from .symbols import VARIATION_SELECTOR

if TYPE_CHECKING:
    from .catalog import GameGrammar

# Separators seen inside puzzle numbers: "1,492", "1.492", "1 492".
PUZZLE_SEPARATORS = re.compile(r"[,.\s]")


@dataclass(frozen=True)
class Extraction:
    """
    One extraction pattern: a header plus fields searched after it.

    header:   regex located with .search(); its named groups become captures
    required: field regexes that must all be found after the header
    optional: field regexes that may be absent (captured as "")
    label:    short tag recorded in the captures ("emoji_based", ...)
    """
    header: re.Pattern[str]
    required: Mapping[str, re.Pattern[str]] = field(default_factory=dict)
    optional: Mapping[str, re.Pattern[str]] = field(default_factory=dict)
    label: str = ""


@dataclass(frozen=True)
class Captures:
    groups: Dict[str, str]
    text: str
    variant: str
    label: str = ""

    def get(self, name: str, default: str = "") -> str:
        return self.groups.get(name) or default

    @property
    def puzzle_number(self) -> Optional[str]:
        raw = self.get("puzzle")
        if not raw:
            return None
        return PUZZLE_SEPARATORS.sub("", raw)


def clean_text(text: str, decorative: str) -> str:
    """Strip the grammar's decorative glyphs and bare variation selectors."""
    if not text:
        return ""
    drop = {ord(ch): None for ch in decorative}
    drop[ord(VARIATION_SELECTOR)] = None
    return text.translate(drop)


def _named_groups(match: "re.Match[str]", names: Tuple[str, ...] = ()) -> Dict[str, str]:
    groups = {k: (v or "") for k, v in match.groupdict().items()}
    for name in names:
        groups.setdefault(name, match.group(1) if match.re.groups else match.group(0))
    return groups


def _apply(extraction: Extraction, text: str) -> Optional[Dict[str, str]]:
    header = extraction.header.search(text)
    if header is None:
        return None

    groups = _named_groups(header)
    pos = header.end()

    for name, pattern in extraction.required.items():
        found = pattern.search(text, pos)
        if found is None:
            logging.debug("[EXTRACT] required field %r missing", name)
            return None
        groups.update(_named_groups(found, (name,)))

    for name, pattern in extraction.optional.items():
        found = pattern.search(text, pos)
        if found is None:
            groups.setdefault(name, "")
            continue
        groups.update(_named_groups(found, (name,)))

    return groups


def extract(text: str, grammar: "GameGrammar") -> Captures:
    """
    Run the grammar's extraction patterns over the cleaned text, then the
    raw text. Raises UnparseableShare when nothing matches either variant.
    """
    raw = text or ""
    cleaned = clean_text(raw, grammar.decorative)

    for variant, candidate in (("cleaned", cleaned), ("raw", raw)):
        for extraction in grammar.extractions:
            groups = _apply(extraction, candidate)
            if groups is not None:
                logging.debug(
                    "[EXTRACT] %s matched %s text (%s)",
                    grammar.name, variant, extraction.label or "default",
                )
                return Captures(groups=groups, text=raw, variant=variant, label=extraction.label)

    logging.info("[EXTRACT] %s: no pattern matched", grammar.name)
    raise UnparseableShare(grammar)
