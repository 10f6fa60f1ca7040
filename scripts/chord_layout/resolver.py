"""Chord preview: what each next key press would complete to.

Given the keys currently held, every one of the 14 keys gets a slot
(in KEY_ORDER) holding the output that pressing it next would produce,
or None. Matching is exact on the key set; there is no prefix scoring.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from .keys import KEY_ORDER, Hand, Key
from .layout import Layout
from .result import Err, Ok, Result


@dataclass(frozen=True)
class ResolverInputError:
    """The pressed keys cannot form a single-hand chord."""

    pressed: frozenset[Key]
    reason: str = "pressed keys span both hands"

    def __str__(self) -> str:
        names = " ".join(key.value for key in KEY_ORDER if key in self.pressed)
        return f"{self.reason}: {names}"


@dataclass(frozen=True)
class Preview:
    """Resolution result for one pressed set."""

    slots: tuple[str | None, ...]
    current: str | None

    def by_key(self) -> dict[Key, str | None]:
        return dict(zip(KEY_ORDER, self.slots))


def _pressed_hand(pressed: frozenset[Key]) -> Result[Hand | None, ResolverInputError]:
    hands = {key.hand for key in pressed}
    if len(hands) > 1:
        return Err(ResolverInputError(pressed))
    return Ok(hands.pop() if hands else None)


def resolve(layout: Layout, pressed: Iterable[Key]) -> Result[list[str | None], ResolverInputError]:
    """Resolve the next-press output for every key.

    Args:
        layout: Parsed layout
        pressed: Keys currently held, all on one hand (may be empty)

    Returns:
        Ok(list of 14 outputs in KEY_ORDER) or Err(ResolverInputError)
        when the pressed keys mix hands
    """
    pressed = frozenset(pressed)
    hand = _pressed_hand(pressed)
    if isinstance(hand, Err):
        return hand

    slots: list[str | None] = []
    for key in KEY_ORDER:
        # Chords never span hands, so only same-hand keys can extend the pressed set
        if key in pressed or (hand.value is not None and key.hand is not hand.value):
            slots.append(None)
            continue
        record = layout.lookup(pressed | {key})
        slots.append(record.output if record is not None else None)
    return Ok(slots)


def current_output(layout: Layout, pressed: Iterable[Key]) -> str | None:
    """Output produced by the pressed keys themselves, if they form a chord."""
    pressed = frozenset(pressed)
    if not pressed:
        return None
    record = layout.lookup(pressed)
    return record.output if record is not None else None


def preview(layout: Layout, pressed: Iterable[Key]) -> Result[Preview, ResolverInputError]:
    """Resolve slots and the current output together."""
    pressed = frozenset(pressed)
    slots = resolve(layout, pressed)
    if isinstance(slots, Err):
        return slots
    return Ok(Preview(slots=tuple(slots.value), current=current_output(layout, pressed)))
