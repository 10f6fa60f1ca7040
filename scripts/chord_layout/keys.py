"""Physical key vocabulary: hands, finger roles and the 14 key positions.

Key positions, as seen from above the device:

    +---+---+---+---+       +---+---+---+---+
    | LP| LR| LM| LI|       | RI| RM| RR| RP|
    +---+---+---+---+       +---+---+---+---+

             +---+             +---+
             | LU+---+     +---+ RU|
             +---+ LL|     | RL+---+
             | LD+---+     +---+ RD|
             +---+             +---+
"""

from enum import Enum


class Hand(Enum):
    """Hand marker as written in layout text."""

    LEFT = "L"
    RIGHT = "R"

    @property
    def other(self) -> "Hand":
        return Hand.RIGHT if self is Hand.LEFT else Hand.LEFT


class FingerRole(Enum):
    """Finger role letters. Declaration order is the canonical role order."""

    PINKIE = "P"
    RING = "R"
    MIDDLE = "M"
    INDEX = "I"
    THUMB_LEFT = "L"
    THUMB_UP = "U"
    THUMB_DOWN = "D"

    @property
    def rank(self) -> int:
        return _ROLE_RANK[self]


_ROLE_RANK = {role: i for i, role in enumerate(FingerRole)}

# Bit positions used by the keychordz firmware (Finger::* as u16)
_FIRMWARE_BITS = {
    FingerRole.PINKIE: 6,
    FingerRole.RING: 5,
    FingerRole.MIDDLE: 4,
    FingerRole.INDEX: 3,
    FingerRole.THUMB_UP: 2,
    FingerRole.THUMB_DOWN: 1,
    FingerRole.THUMB_LEFT: 0,
}


class Key(Enum):
    """One physical key, named <hand><role>.

    Declaration order is the canonical key order used by resolution results.
    """

    LP = "LP"
    LR = "LR"
    LM = "LM"
    LI = "LI"
    LL = "LL"
    LU = "LU"
    LD = "LD"
    RP = "RP"
    RR = "RR"
    RM = "RM"
    RI = "RI"
    RL = "RL"
    RU = "RU"
    RD = "RD"

    @property
    def hand(self) -> Hand:
        return Hand(self.value[0])

    @property
    def role(self) -> FingerRole:
        return FingerRole(self.value[1])

    @property
    def index(self) -> int:
        """Position of this key in KEY_ORDER."""
        return _KEY_INDEX[self]

    @property
    def mask(self) -> int:
        """Firmware bit mask for this key."""
        shift = _FIRMWARE_BITS[self.role]
        if self.hand is Hand.LEFT:
            shift += 8
        return 1 << shift

    @classmethod
    def of(cls, hand: Hand, role: FingerRole) -> "Key":
        return cls(hand.value + role.value)


KEY_ORDER: tuple[Key, ...] = tuple(Key)
KEY_COUNT = len(KEY_ORDER)

_KEY_INDEX = {key: i for i, key in enumerate(KEY_ORDER)}


def keys_for_hand(hand: Hand) -> tuple[Key, ...]:
    """Return the seven keys of one hand in canonical order."""
    return tuple(key for key in KEY_ORDER if key.hand is hand)


def parse_key(name: str) -> Key:
    """Parse a two-letter key name like 'lp' or 'RU'.

    Raises:
        ValueError: If the name is not one of the 14 key names
    """
    try:
        return Key(name.strip().upper())
    except ValueError:
        valid = ", ".join(key.value for key in KEY_ORDER)
        raise ValueError(f"Unknown key '{name}' (expected one of: {valid})") from None
