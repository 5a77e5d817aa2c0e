from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterator, List, NamedTuple, Optional, Union

VARIATION_SELECTOR = "\ufe0f"
KEYCAP = "\u20e3"


@dataclass(frozen=True)
class Digit:
    value: int


@dataclass(frozen=True)
class Failure:
    pass


@dataclass(frozen=True)
class ColorTag:
    label: str


SymbolValue = Union[Digit, Failure, ColorTag]

FAILURE = Failure()

# A glyph is either a keycap sequence ("3️⃣", with or without the
# selector) or a single code point plus an optional trailing selector.
GLYPH_PATTERN = re.compile(r"[0-9#*]\ufe0f?\u20e3|[\s\S]\ufe0f?")

_SYMBOLS: Dict[str, SymbolValue] = {
    **{f"{n}{KEYCAP}": Digit(n) for n in range(10)},
    "🔟": Digit(10),
    "🕚": Digit(11),
    "🕛": Digit(12),
    "🟥": FAILURE,
    "🟩": ColorTag("green"),
    "🟨": ColorTag("yellow"),
    "🟦": ColorTag("blue"),
    "🟪": ColorTag("purple"),
    "🟧": ColorTag("orange"),
    "🟫": ColorTag("brown"),
    "⬛": ColorTag("black"),
    "⬜": ColorTag("white"),
}

SUPPORTED_GLYPHS = tuple(_SYMBOLS)


class DecodedGlyph(NamedTuple):
    glyph: str
    value: Optional[SymbolValue]


def decode(glyph: str) -> Optional[SymbolValue]:
    """
    Map one glyph to its symbol value.

    Variation selectors are ignored, so "5️⃣" and "5⃣" both decode to
    Digit(5). Anything outside the known set returns None.
    """
    if not glyph:
        return None
    return _SYMBOLS.get(glyph.replace(VARIATION_SELECTOR, ""))


def iter_glyphs(text: str) -> Iterator[str]:
    for match in GLYPH_PATTERN.finditer(text or ""):
        yield match.group(0)


def decode_line(line: str) -> List[DecodedGlyph]:
    """Decode every non-whitespace glyph of a line, keeping order."""
    return [
        DecodedGlyph(glyph, decode(glyph))
        for glyph in iter_glyphs(line)
        if not glyph.isspace()
    ]


def decode_lines(text: str) -> List[List[DecodedGlyph]]:
    return [decode_line(line) for line in (text or "").splitlines()]
