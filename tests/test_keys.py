"""Tests for the physical key model."""

import pytest

from chord_layout.keys import (
    KEY_COUNT,
    KEY_ORDER,
    FingerRole,
    Hand,
    Key,
    keys_for_hand,
    parse_key,
)


class TestKeyOrder:
    def test_fourteen_keys(self) -> None:
        assert KEY_COUNT == 14
        assert len(set(KEY_ORDER)) == 14

    def test_canonical_order(self) -> None:
        names = [key.value for key in KEY_ORDER]
        assert names == [
            "LP", "LR", "LM", "LI", "LL", "LU", "LD",
            "RP", "RR", "RM", "RI", "RL", "RU", "RD",
        ]

    def test_index_matches_position(self) -> None:
        for i, key in enumerate(KEY_ORDER):
            assert key.index == i

    def test_keys_for_hand(self) -> None:
        left = keys_for_hand(Hand.LEFT)
        assert len(left) == 7
        assert all(key.hand is Hand.LEFT for key in left)
        assert [key.role for key in left] == list(FingerRole)


class TestKey:
    def test_hand_and_role(self) -> None:
        assert Key.RU.hand is Hand.RIGHT
        assert Key.RU.role is FingerRole.THUMB_UP

    def test_of_round_trips(self) -> None:
        for key in KEY_ORDER:
            assert Key.of(key.hand, key.role) is key

    def test_other_hand(self) -> None:
        assert Hand.LEFT.other is Hand.RIGHT
        assert Hand.RIGHT.other is Hand.LEFT

    def test_firmware_masks(self) -> None:
        assert Key.LP.mask == 0b0100000000000000
        assert Key.LU.mask == 0b0000010000000000
        assert Key.LL.mask == 0b0000000100000000
        assert Key.RP.mask == 0b0000000001000000
        assert Key.RL.mask == 0b0000000000000001

    def test_masks_unique(self) -> None:
        masks = [key.mask for key in KEY_ORDER]
        assert len(set(masks)) == 14


class TestParseKey:
    def test_case_insensitive(self) -> None:
        assert parse_key("lp") is Key.LP
        assert parse_key(" Rd ") is Key.RD

    def test_unknown_key(self) -> None:
        with pytest.raises(ValueError, match="Unknown key 'LX'"):
            parse_key("LX")
