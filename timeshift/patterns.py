"""Pattern tokens and the ordered catalog of known date/time layouts.

A pattern is written as a strftime-style template (``'%Y-%m-%d %H:%M:%S'``)
and kept as a tuple of tokens. Parsing and rendering are done token by token
so that every layout in the catalog behaves the same on every platform,
including the unpadded (``%-I``) and lower-case meridiem (``%P``) forms.
"""

import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import NamedTuple, Optional, Tuple, Union

MONTH_NAMES = ('January', 'February', 'March', 'April', 'May', 'June', 'July',
               'August', 'September', 'October', 'November', 'December')
MONTH_ABBREVIATIONS = tuple(name[:3] for name in MONTH_NAMES)
WEEKDAY_NAMES = ('Monday', 'Tuesday', 'Wednesday', 'Thursday', 'Friday', 'Saturday', 'Sunday')
WEEKDAY_ABBREVIATIONS = tuple(name[:3] for name in WEEKDAY_NAMES)

# Regex fragment captured by each directive
TOKEN_COMPONENTS = {
    '%Y': r'(\d{4})',
    '%y': r'(\d{2})',
    '%m': r'(\d{1,2})',
    '%-m': r'(\d{1,2})',
    '%b': r'([A-Za-z]{3})',
    '%B': r'([A-Za-z]+)',
    '%d': r'(\d{1,2})',
    '%-d': r'(\d{1,2})',
    '%a': r'([A-Za-z]{3})',
    '%A': r'([A-Za-z]+)',
    '%H': r'(\d{1,2})',
    '%-H': r'(\d{1,2})',
    '%I': r'(\d{1,2})',
    '%-I': r'(\d{1,2})',
    '%M': r'(\d{1,2})',
    '%S': r'(\d{1,2})',
    '%p': r'([AaPp][Mm])',
    '%P': r'([AaPp][Mm])',
}

HOUR_24_TO_12 = {'%H': '%I', '%-H': '%-I'}

DIRECTIVE_PATTERN = re.compile(r'%-?[A-Za-z%]')


class Token(NamedTuple):
    kind: str   # directive such as '%Y', or 'literal'
    text: str

    @property
    def is_literal(self) -> bool:
        return self.kind == 'literal'


def tokenize(template: str) -> Tuple[Token, ...]:
    """Split a template into directive and literal tokens"""
    tokens = []
    position = 0
    for match in DIRECTIVE_PATTERN.finditer(template):
        if match.start() > position:
            tokens.append(Token('literal', template[position:match.start()]))
        directive = match.group(0)
        if directive == '%%':
            tokens.append(Token('literal', '%'))
        else:
            tokens.append(Token(directive, directive))
        position = match.end()
    if position < len(template):
        tokens.append(Token('literal', template[position:]))
    return tuple(tokens)


def build_regex(tokens: Tuple[Token, ...]) -> Optional[re.Pattern]:
    """Build the regex (matched in full) that captures every parseable directive"""
    parts = []
    for token in tokens:
        if token.is_literal:
            parts.append(re.escape(token.text))
        elif token.kind in TOKEN_COMPONENTS:
            parts.append(TOKEN_COMPONENTS[token.kind])
        else:
            # Output-only directive; a pattern containing it never parses
            return None
    return re.compile(''.join(parts))


@dataclass(frozen=True)
class Pattern:
    template: str
    tokens: Tuple[Token, ...] = field(compare=False, repr=False)
    regex: Optional[re.Pattern] = field(compare=False, repr=False)

    def __str__(self) -> str:
        return self.template

    @property
    def directives(self) -> Tuple[str, ...]:
        return tuple(token.kind for token in self.tokens if not token.is_literal)

    @property
    def parseable(self) -> bool:
        return self.regex is not None

    def with_twelve_hour_clock(self) -> 'Pattern':
        """Same layout with every 24-hour token replaced by its 12-hour form"""
        template = ''.join(
            HOUR_24_TO_12.get(token.kind, token.kind) if not token.is_literal
            else token.text.replace('%', '%%')
            for token in self.tokens
        )
        return compile_pattern(template)


@lru_cache(maxsize=256)
def compile_pattern(template: str) -> Pattern:
    tokens = tokenize(template)
    return Pattern(template=template, tokens=tokens, regex=build_regex(tokens))


def as_pattern(pattern: Union[Pattern, str]) -> Pattern:
    if isinstance(pattern, Pattern):
        return pattern
    return compile_pattern(pattern)


# Most to least structurally specific: the first layout that parses and
# reproduces a string wins, so the order here is significant.
CATALOG_TEMPLATES = (
    # Numeric date and 24-hour time
    '%Y-%m-%d %H:%M:%S',
    '%Y/%m/%d %H:%M:%S',
    '%Y_%m_%d %H:%M:%S',
    '%Y %m %d %H:%M:%S',
    '%Y-%m-%d %I:%M:%S %p',
    '%Y/%m/%d %I:%M:%S %p',
    '%Y_%m_%d %I:%M:%S %p',
    '%Y %m %d %I:%M:%S %p',
    # Time only
    '%H:%M:%S',
    '%I:%M:%S %p',
    '%I:%M:%S%P',
    # Day first
    '%d-%m-%Y %H:%M:%S',
    '%d/%m/%Y %H:%M:%S',
    '%d_%m_%Y %H:%M:%S',
    '%d %m %Y %H:%M:%S',
    '%d-%m-%Y %I:%M:%S %p',
    '%d/%m/%Y %I:%M:%S %p',
    '%d_%m_%Y %I:%M:%S %p',
    '%d %m %Y %I:%M:%S %p',
    # Compact, no separators
    '%Y%m%d%H%M%S',
    '%d%m%Y%H%M%S',
    # Date only
    '%Y-%m-%d',
    '%Y/%m/%d',
    '%Y_%m_%d',
    '%Y %m %d',
    '%d-%m-%Y',
    '%d/%m/%Y',
    '%d_%m_%Y',
    '%d %m %Y',
    # Month and weekday names
    '%b %d, %Y %H:%M:%S',
    '%d %b %Y %H:%M:%S',
    '%d %B %Y %H:%M:%S',
    '%Y-%B-%d %H:%M:%S',
    '%d %B %Y',
    '%Y %B %d',
    '%Y %b %d',
    '%a, %b %d, %Y %H:%M:%S',
    '%Y %b %d %a %H:%M:%S',
    '%a, %d %b %Y %H:%M:%S',
    # Names with AM/PM
    '%d-%b-%Y %I:%M:%S %p',
    '%d/%b/%Y %I:%M:%S %p',
    '%d_%b_%Y %I:%M:%S %p',
    '%d %m %Y %I:%M:%S %p',
    '%b %d, %Y %I:%M:%S %p',
    '%d %b %Y %I:%M:%S %p',
    '%d %B %Y %I:%M:%S %p',
    '%Y-%B-%d %I:%M:%S %p',
    '%d %B %Y %p',
    '%Y %B %d %p',
    '%Y %b %d %p',
    '%a, %b %d, %Y %I:%M:%S %p',
    '%Y %b %d %a %I:%M:%S %p',
    '%a, %d %b %Y %I:%M:%S %p',
    # Lower-case am/pm
    '%Y-%m-%d %I:%M:%S %P',
    '%Y/%m/%d %I:%M:%S %P',
    '%Y_%m_%d %I:%M:%S %P',
    '%Y %m %d %I:%M:%S %P',
    '%d-%m-%Y %I:%M:%S %P',
    '%d/%m/%Y %I:%M:%S %P',
    '%d_%m_%Y %I:%M:%S %P',
    '%d %m %Y %I:%M:%S %P',
    '%d-%b-%Y %I:%M:%S %P',
    '%d/%b/%Y %I:%M:%S %P',
    '%d_%b_%Y %I:%M:%S %P',
    '%d %m %Y %I:%M:%S %P',
    '%b %d, %Y %I:%M:%S %P',
    '%d %b %Y %I:%M:%S %P',
    '%d %B %Y %I:%M:%S %P',
    '%Y-%B-%d %I:%M:%S %P',
    '%d %B %Y %P',
    '%Y %B %d %P',
    '%Y %b %d %P',
    '%a, %b %d, %Y %I:%M:%S %P',
    '%Y %b %d %a %I:%M:%S %P',
    '%a, %d %b %Y %I:%M:%S %P',
    # Unpadded 12-hour clock
    '%-I:%M:%S %p',
    '%-I:%M:%S %P',
)

CATALOG: Tuple[Pattern, ...] = tuple(
    compile_pattern(template) for template in dict.fromkeys(CATALOG_TEMPLATES)
)
