"""Shared fixtures for chord_layout tests."""

from pathlib import Path

import pytest

from chord_layout.layout import Layout
from chord_layout.parser import parse

LAYOUTS_DIR = Path(__file__).resolve().parent.parent / "layouts"


def parse_ok(text: str) -> Layout:
    """Parse text that is expected to be valid."""
    result = parse(text)
    assert result.is_ok, result
    return result.value


@pytest.fixture
def example_path() -> Path:
    return LAYOUTS_DIR / "asentiop.cfg"


@pytest.fixture
def example_layout(example_path: Path) -> Layout:
    return parse_ok(example_path.read_text(encoding="utf-8"))


@pytest.fixture
def full_single_layout() -> Layout:
    """Every key mapped on its own plus two chords."""
    text = "\n".join(
        [
            "LP a", "LR b", "LM c", "LI d", "LL e", "LU f", "LD g",
            "RP h", "RR i", "RM j", "RI k", "RL l", "RU m", "RD n",
            "LPR x",
            "RMI y",
        ]
    )
    return parse_ok(text)
