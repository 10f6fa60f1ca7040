"""Parser for the line-oriented chord layout format.

Format, one chord per line:

    <hand><roles>... <output>

e.g. ``LPR a`` or, split into one token per finger, ``LP LR a``.
Hands are L/R, roles are P R M I (fingers) and L U D (thumbs).
"""

import logging
import re
from dataclasses import dataclass

from .config import ParseSettings
from .keys import FingerRole, Hand
from .layout import ChordDefinition, Layout
from .result import Err, Ok, Result

logger = logging.getLogger(__name__)

CHORD_TOKEN = re.compile(r"^([LR])([A-Z]*)$")

DUPLICATE_FINGER = "duplicate finger in chord"
EMPTY_CHORD = "empty chord"
MIXED_HAND = "mixed-hand chord"
MISSING_OUTPUT = "missing output key"
UNRECOGNIZED = "unrecognized token"


@dataclass(frozen=True)
class ParseError:
    """Why a line could not be parsed."""

    line: int
    reason: str
    raw: str = ""

    def __str__(self) -> str:
        message = f"line {self.line}: {self.reason}"
        if self.raw:
            message += f": {self.raw!r}"
        return message


def parse(text: str, settings: ParseSettings | None = None) -> Result[Layout, ParseError]:
    """Parse layout text into a Layout.

    No cross-line validation is done here; see checker.check.

    Args:
        text: Full layout text
        settings: Parser settings (comment prefix)

    Returns:
        Ok(Layout) or Err(ParseError) for the first bad line
    """
    if settings is None:
        settings = ParseSettings()

    records = []
    # Only \n ends a line, so line numbers match what editors show
    for line_num, raw in enumerate(text.lstrip("\ufeff").split("\n"), start=1):
        stripped = raw.strip()
        if not stripped or stripped.startswith(settings.comment_prefix):
            continue
        parsed = parse_line(stripped, line_num)
        if isinstance(parsed, Err):
            logger.debug("parse failed at line %d: %s", line_num, parsed.error.reason)
            return parsed
        records.append(parsed.value)

    logger.debug("parsed %d chord definitions", len(records))
    return Ok(Layout(records))


def parse_line(line: str, line_num: int = 0) -> Result[ChordDefinition, ParseError]:
    """Parse a single non-blank, non-comment line."""
    tokens = line.split()
    *chord_tokens, output = tokens

    if not chord_tokens:
        # A lone chord token has no output, anything else is garbage
        if CHORD_TOKEN.match(output.upper()):
            return Err(ParseError(line_num, MISSING_OUTPUT, line))
        return Err(ParseError(line_num, UNRECOGNIZED, line))

    hand: Hand | None = None
    roles: set[FingerRole] = set()

    for token in chord_tokens:
        match = CHORD_TOKEN.match(token.upper())
        if not match:
            return Err(ParseError(line_num, UNRECOGNIZED, line))

        token_hand = Hand(match.group(1))
        letters = match.group(2)
        if hand is not None and token_hand is not hand:
            return Err(ParseError(line_num, MIXED_HAND, line))
        hand = token_hand

        if not letters:
            return Err(ParseError(line_num, EMPTY_CHORD, line))

        for letter in letters:
            try:
                role = FingerRole(letter)
            except ValueError:
                return Err(ParseError(line_num, UNRECOGNIZED, line))
            if role in roles:
                return Err(ParseError(line_num, DUPLICATE_FINGER, line))
            roles.add(role)

    return Ok(ChordDefinition(hand=hand, roles=frozenset(roles), output=output, line=line_num))
