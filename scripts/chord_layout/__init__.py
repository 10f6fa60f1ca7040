"""
Chorded keyboard layout engine.

Parses the line-oriented chord layout format, validates it, exports it
for keychordz/QMK firmware and previews partially pressed chords.

Usage:
    python -m chord_layout check layout.cfg
    python -m chord_layout export layout.cfg -f keychordz
    python -m chord_layout preview layout.cfg LP
"""

from .checker import (
    Diagnostic,
    DiagnosticKind,
    Severity,
    check,
    check_single_keys,
    has_errors,
)
from .config import LayoutSettings, load_settings
from .exporter import (
    InterchangeDocument,
    dump_json,
    dump_yaml,
    export,
    load_document,
    to_keychordz,
    to_qmk_combos,
    to_qmk_keymap,
)
from .keys import KEY_ORDER, FingerRole, Hand, Key, parse_key
from .layout import ChordDefinition, Layout
from .parser import ParseError, parse
from .resolver import Preview, ResolverInputError, current_output, preview, resolve
from .result import Err, Ok, Result
from .session import LayoutSession, toggle

__all__ = [
    # Keys
    "Hand",
    "FingerRole",
    "Key",
    "KEY_ORDER",
    "parse_key",
    # Layout
    "ChordDefinition",
    "Layout",
    # Results
    "Ok",
    "Err",
    "Result",
    # Parser
    "ParseError",
    "parse",
    # Checker
    "Diagnostic",
    "DiagnosticKind",
    "Severity",
    "check",
    "check_single_keys",
    "has_errors",
    # Exporter
    "InterchangeDocument",
    "export",
    "dump_yaml",
    "dump_json",
    "load_document",
    "to_keychordz",
    "to_qmk_keymap",
    "to_qmk_combos",
    # Resolver
    "Preview",
    "ResolverInputError",
    "resolve",
    "current_output",
    "preview",
    # Session
    "LayoutSession",
    "toggle",
    # Settings
    "LayoutSettings",
    "load_settings",
]
