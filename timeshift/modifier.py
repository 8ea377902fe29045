import re
from typing import List, NamedTuple

from timeshift.config import get_testing_mode
from timeshift.errors import UnknownUnit
from timeshift.logger import setup_logger

logger = setup_logger('modifier', testing=get_testing_mode())

UNIT_SYNONYMS = {
    'd': 'day', 'day': 'day', 'days': 'day',
    'm': 'month', 'month': 'month', 'months': 'month',
    'y': 'year', 'year': 'year', 'years': 'year',
    'h': 'hour', 'hour': 'hour', 'hours': 'hour',
    'i': 'minute', 'minute': 'minute', 'minutes': 'minute',
    's': 'second', 'second': 'second', 'seconds': 'second',
}

PART_PATTERN = re.compile(r'([+-])?(\d+)([a-zA-Z]+)')
BARE_NUMBER = re.compile(r'[+-]?\d+')
BARE_UNIT = re.compile(r'[a-zA-Z]+')


class ModifierPart(NamedTuple):
    sign: str
    magnitude: int
    unit: str

    def __str__(self) -> str:
        return f'{self.sign}{self.magnitude} {self.unit}'


class NormalizedModifier(tuple):
    """Ordered (sign, magnitude, unit) parts; renders as '+7 day -1 year'"""

    def __new__(cls, parts=()):
        return super().__new__(cls, parts)

    def __str__(self) -> str:
        return ' '.join(str(part) for part in self)

    def __repr__(self) -> str:
        return f'NormalizedModifier({list(self)!r})'


def canonical_unit(unit: str) -> str:
    canonical = UNIT_SYNONYMS.get(unit.lower())
    if canonical is None:
        raise UnknownUnit(unit.lower())
    return canonical


def split_tokens(text: str) -> List[str]:
    """Whitespace-separated tokens, with '3 months' glued back into '3months'"""
    words = text.split()
    tokens = []
    i = 0
    while i < len(words):
        word = words[i]
        if (BARE_NUMBER.fullmatch(word) and i + 1 < len(words)
                and BARE_UNIT.fullmatch(words[i + 1])):
            word += words[i + 1]
            i += 1
        tokens.append(word)
        i += 1
    return tokens


def normalize_modifier(text: str) -> NormalizedModifier:
    """Parse an interval string such as '+7d -1y' or '3 months'.

    Parts without a sign take the sign of the very first character of the
    string, or '+' when it has none. Tokens that are not a number followed
    by a unit are ignored; a unit outside the synonym table raises UnknownUnit.
    """
    default_sign = text[:1] if text[:1] in ('+', '-') else '+'

    parts: List[ModifierPart] = []
    for token in split_tokens(text):
        match = PART_PATTERN.search(token)
        if not match:
            continue
        sign, number, unit = match.groups()
        parts.append(ModifierPart(sign or default_sign, int(number), canonical_unit(unit)))

    modifier = NormalizedModifier(parts)
    logger.debug(f"Normalized modifier '{text}' -> '{modifier}'")
    return modifier
