"""Tests for layout validation."""

from chord_layout.checker import (
    DiagnosticKind,
    Severity,
    check,
    check_single_keys,
    has_errors,
)
from chord_layout.config import CheckSettings
from chord_layout.keys import KEY_ORDER, Key
from chord_layout.layout import Layout
from chord_layout.result import Err, Ok
from tests.conftest import parse_ok

BOTH_HANDS_FULL = "LPRMILUD a\nRPRMILUD b"


class TestDuplicateChord:
    def test_set_equality_not_text(self) -> None:
        layout = parse_ok("LPR a\nLRP a\nRPRMILUD z\nLMILUD q")
        diagnostics = check(layout)
        errors = [d for d in diagnostics if d.severity is Severity.ERROR]
        assert len(errors) == 1
        assert errors[0].kind is DiagnosticKind.DUPLICATE_CHORD
        assert errors[0].lines == (1, 2)
        assert errors[0].chord == "LPR"

    def test_every_pair_reported(self) -> None:
        layout = parse_ok("RI a\nRI b\nRI c")
        dupes = [d for d in check(layout) if d.kind is DiagnosticKind.DUPLICATE_CHORD]
        assert [d.lines for d in dupes] == [(1, 2), (1, 3), (2, 3)]
        assert all(d.severity is Severity.ERROR for d in dupes)

    def test_has_errors(self) -> None:
        assert has_errors(check(parse_ok("LP a\nLP b")))
        assert not has_errors(check(parse_ok(BOTH_HANDS_FULL)))

    def test_does_not_mutate(self) -> None:
        layout = parse_ok("LP a\nLP b")
        before = layout.records
        check(layout)
        assert layout.records == before


class TestDuplicateOutput:
    def test_warns_on_shared_output(self) -> None:
        layout = parse_ok(BOTH_HANDS_FULL + "\nLP x\nRP x")
        (diagnostic,) = [d for d in check(layout) if d.kind is DiagnosticKind.DUPLICATE_OUTPUT]
        assert diagnostic.severity is Severity.WARNING
        assert diagnostic.lines == (3, 4)
        assert "'x'" in diagnostic.message

    def test_same_chord_same_output_is_not_aliasing(self) -> None:
        layout = parse_ok("LPR a\nLRP a")
        kinds = [d.kind for d in check(layout)]
        assert DiagnosticKind.DUPLICATE_OUTPUT not in kinds

    def test_can_be_disabled(self) -> None:
        layout = parse_ok(BOTH_HANDS_FULL + "\nLP x\nRP x")
        diagnostics = check(layout, CheckSettings(duplicate_output=False))
        assert diagnostics == []


class TestUnreachableKey:
    def test_reports_unused_keys_on_used_hand(self) -> None:
        layout = parse_ok("LPRMIL a\nRPRMILUD b")
        unreachable = [d for d in check(layout) if d.kind is DiagnosticKind.UNREACHABLE_KEY]
        assert [d.key for d in unreachable] == [Key.LU, Key.LD]
        assert all(d.severity is Severity.WARNING for d in unreachable)

    def test_unused_hand_reports_every_key(self) -> None:
        """An empty hand gets key warnings and, separately, a balance warning."""
        diagnostics = check(parse_ok("LPRMILUD a"))
        unreachable = [d.key for d in diagnostics if d.kind is DiagnosticKind.UNREACHABLE_KEY]
        assert unreachable == [Key.RP, Key.RR, Key.RM, Key.RI, Key.RL, Key.RU, Key.RD]
        assert diagnostics[-1].kind is DiagnosticKind.HAND_BALANCE

    def test_empty_layout_reports_all_keys(self) -> None:
        diagnostics = check(Layout())
        assert [d.key for d in diagnostics] == list(KEY_ORDER)
        assert all(d.kind is DiagnosticKind.UNREACHABLE_KEY for d in diagnostics)


class TestHandBalance:
    def test_right_hand_missing(self) -> None:
        (diagnostic,) = [
            d for d in check(parse_ok("LPRMILUD a")) if d.kind is DiagnosticKind.HAND_BALANCE
        ]
        assert diagnostic.kind is DiagnosticKind.HAND_BALANCE
        assert diagnostic.message.startswith("right hand has no chords")

    def test_empty_layout_has_no_balance_warning(self) -> None:
        kinds = [d.kind for d in check(Layout())]
        assert DiagnosticKind.HAND_BALANCE not in kinds

    def test_example_layout_is_clean(self, example_layout: Layout) -> None:
        assert check(example_layout) == []


class TestCheckOrder:
    def test_stable_order(self) -> None:
        layout = parse_ok("LP a\nLP b\nLR a\nLM c")
        kinds = [d.kind for d in check(layout)]
        assert kinds == [
            DiagnosticKind.DUPLICATE_CHORD,
            DiagnosticKind.DUPLICATE_OUTPUT,
            *[DiagnosticKind.UNREACHABLE_KEY] * 11,
            DiagnosticKind.HAND_BALANCE,
        ]

    def test_repeatable(self) -> None:
        layout = parse_ok("LP a\nLP b\nLR a")
        assert check(layout) == check(layout)


class TestCheckSingleKeys:
    def test_all_mapped(self, full_single_layout: Layout) -> None:
        result = check_single_keys(full_single_layout)
        assert isinstance(result, Ok)
        assert result.value == list("abcdefghijklmn")

    def test_missing_key(self) -> None:
        result = check_single_keys(parse_ok("LP a"))
        assert isinstance(result, Err)
        assert result.error == "Key LR is not mapped"

    def test_double_mapped(self) -> None:
        result = check_single_keys(parse_ok("LP a\nLP b"))
        assert isinstance(result, Err)
        assert result.error == "Key LP is already mapped to a"
