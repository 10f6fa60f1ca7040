"""Chord records and the immutable layout built from them."""

from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field

from .keys import FingerRole, Hand, Key


class ChordDefinition(BaseModel):
    """One authored line: a single-hand chord and the output it produces."""

    model_config = ConfigDict(frozen=True)

    hand: Hand
    roles: frozenset[FingerRole] = Field(min_length=1)
    output: str = Field(min_length=1, pattern=r"^\S+$")
    line: int = Field(0, ge=0, description="1-based source line, 0 if not from text")

    @property
    def keys(self) -> frozenset[Key]:
        return frozenset(Key.of(self.hand, role) for role in self.roles)

    @property
    def sorted_roles(self) -> list[FingerRole]:
        """Roles in canonical order."""
        return sorted(self.roles, key=lambda role: role.rank)

    @property
    def sorted_keys(self) -> list[Key]:
        return [Key.of(self.hand, role) for role in self.sorted_roles]

    @property
    def notation(self) -> str:
        """Canonical chord token, e.g. 'LPR'."""
        return self.hand.value + "".join(role.value for role in self.sorted_roles)

    def __str__(self) -> str:
        return f"{self.notation} {self.output}"


class Layout:
    """Ordered, immutable collection of chord definitions.

    Records keep their authored order. Lookups by key set go through an
    index built once here; when several records share a key set the
    earliest one wins.
    """

    __slots__ = ("_records", "_index")

    def __init__(self, records: Iterable[ChordDefinition] = ()):
        self._records: tuple[ChordDefinition, ...] = tuple(records)
        index: dict[frozenset[Key], ChordDefinition] = {}
        for record in self._records:
            index.setdefault(record.keys, record)
        self._index = index

    @property
    def records(self) -> tuple[ChordDefinition, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ChordDefinition]:
        return iter(self._records)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Layout):
            return NotImplemented
        return self._records == other._records

    def __hash__(self) -> int:
        return hash(self._records)

    def __repr__(self) -> str:
        return f"Layout({len(self._records)} chords)"

    def lookup(self, keys: Iterable[Key]) -> ChordDefinition | None:
        """Return the authoritative record for an exact key set, if any."""
        return self._index.get(frozenset(keys))

    def for_hand(self, hand: Hand) -> list[ChordDefinition]:
        return [record for record in self._records if record.hand is hand]

    def pairs(self) -> set[tuple[frozenset[Key], str]]:
        """The (key set, output) pairs this layout defines."""
        return {(record.keys, record.output) for record in self._records}

    def to_text(self) -> str:
        """Render the layout in canonical text form, one chord per line."""
        return "\n".join(str(record) for record in self._records)
