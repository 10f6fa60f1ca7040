"""Layout validation.

Checks run in a fixed order so diagnostics are reproducible:

1. duplicate chord (error)
2. duplicate output (warning)
3. unreachable key (warning)
4. hand balance (warning)
"""

import logging
from collections import defaultdict
from enum import Enum

from pydantic import BaseModel, ConfigDict

from .config import CheckSettings
from .keys import KEY_COUNT, KEY_ORDER, Hand, Key, keys_for_hand
from .layout import ChordDefinition, Layout
from .result import Err, Ok, Result

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class DiagnosticKind(str, Enum):
    DUPLICATE_CHORD = "duplicate_chord"
    DUPLICATE_OUTPUT = "duplicate_output"
    UNREACHABLE_KEY = "unreachable_key"
    HAND_BALANCE = "hand_balance"


class Diagnostic(BaseModel):
    """A single finding about a layout."""

    model_config = ConfigDict(frozen=True)

    severity: Severity
    kind: DiagnosticKind
    message: str
    lines: tuple[int, ...] = ()
    chord: str | None = None
    key: Key | None = None

    def __str__(self) -> str:
        where = ""
        if self.lines:
            where = " (line " + ", ".join(str(n) for n in self.lines) + ")"
        return f"{self.severity.value}: {self.message}{where}"


def check(layout: Layout, settings: CheckSettings | None = None) -> list[Diagnostic]:
    """Inspect a layout and return its diagnostics. The layout is not modified.

    Args:
        layout: Parsed layout
        settings: Toggles for the advisory checks

    Returns:
        Diagnostics in check order, empty if the layout is sound
    """
    if settings is None:
        settings = CheckSettings()

    diagnostics = _check_duplicate_chords(layout)
    if settings.duplicate_output:
        diagnostics.extend(_check_duplicate_outputs(layout))
    if settings.unreachable_keys:
        diagnostics.extend(_check_unreachable_keys(layout))
    if settings.hand_balance:
        diagnostics.extend(_check_hand_balance(layout))

    logger.debug("check found %d diagnostics", len(diagnostics))
    return diagnostics


def has_errors(diagnostics: list[Diagnostic]) -> bool:
    return any(d.severity is Severity.ERROR for d in diagnostics)


def _check_duplicate_chords(layout: Layout) -> list[Diagnostic]:
    # key set -> records seen so far, in authored order
    seen: dict[frozenset[Key], list[ChordDefinition]] = defaultdict(list)
    diagnostics = []
    for record in layout:
        earlier = seen[record.keys]
        for other in earlier:
            diagnostics.append(
                Diagnostic(
                    severity=Severity.ERROR,
                    kind=DiagnosticKind.DUPLICATE_CHORD,
                    message=(
                        f"Duplicate chord {record.notation}: '{record.output}' "
                        f"conflicts with '{other.output}'"
                    ),
                    lines=(other.line, record.line),
                    chord=record.notation,
                )
            )
        earlier.append(record)
    return diagnostics


def _check_duplicate_outputs(layout: Layout) -> list[Diagnostic]:
    # output -> distinct key sets, in authored order
    by_output: dict[str, dict[frozenset[Key], ChordDefinition]] = defaultdict(dict)
    for record in layout:
        by_output[record.output].setdefault(record.keys, record)

    diagnostics = []
    for output, chords in by_output.items():
        if len(chords) < 2:
            continue
        records = list(chords.values())
        notations = ", ".join(r.notation for r in records)
        diagnostics.append(
            Diagnostic(
                severity=Severity.WARNING,
                kind=DiagnosticKind.DUPLICATE_OUTPUT,
                message=f"Output '{output}' is produced by several chords: {notations}",
                lines=tuple(r.line for r in records),
            )
        )
    return diagnostics


def _check_unreachable_keys(layout: Layout) -> list[Diagnostic]:
    used: set[Key] = set()
    for record in layout:
        used.update(record.keys)

    diagnostics = []
    for hand in Hand:
        for key in keys_for_hand(hand):
            if key in used:
                continue
            diagnostics.append(
                Diagnostic(
                    severity=Severity.WARNING,
                    kind=DiagnosticKind.UNREACHABLE_KEY,
                    message=f"Key {key.value} is not part of any chord",
                    key=key,
                )
            )
    return diagnostics


def _check_hand_balance(layout: Layout) -> list[Diagnostic]:
    counts = {hand: len(layout.for_hand(hand)) for hand in Hand}
    diagnostics = []
    for hand in Hand:
        if counts[hand] == 0 and counts[hand.other] > 0:
            diagnostics.append(
                Diagnostic(
                    severity=Severity.WARNING,
                    kind=DiagnosticKind.HAND_BALANCE,
                    message=(
                        f"{hand.name.lower()} hand has no chords while "
                        f"{hand.other.name.lower()} hand has {counts[hand.other]}"
                    ),
                )
            )
    return diagnostics


def check_single_keys(layout: Layout) -> Result[list[str], str]:
    """Return the single-key output of every key in canonical order.

    Every key must have exactly one single-key chord; firmware keymaps
    place those outputs directly on the physical keys.
    """
    lookup: list[str | None] = [None] * KEY_COUNT
    for record in layout:
        if len(record.roles) != 1:
            continue
        (key,) = record.keys
        existing = lookup[key.index]
        if existing is not None:
            return Err(f"Key {key.value} is already mapped to {existing}")
        lookup[key.index] = record.output

    for key, output in zip(KEY_ORDER, lookup):
        if output is None:
            return Err(f"Key {key.value} is not mapped")
    return Ok(lookup)
