"""Export layouts for downstream firmware and tooling.

``export`` builds the interchange document (dumped as YAML or JSON);
``to_keychordz`` and the ``to_qmk_*`` functions render firmware source.
Exports never validate: run checker.check first when it matters.
"""

import json
import logging
import re
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from .checker import check_single_keys
from .keys import FingerRole, Hand
from .layout import ChordDefinition, Layout
from .parser import ParseError
from .result import Err, Ok, Result

logger = logging.getLogger(__name__)

RUST_IDENT = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class ChordRecord(BaseModel):
    """Exported form of one chord definition."""

    model_config = ConfigDict(frozen=True)

    hand: Hand
    fingers: str
    output: str


class InterchangeDocument(BaseModel):
    """Serializable projection of a layout."""

    format: Literal["keychordz"] = "keychordz"
    version: int = 1
    chords: list[ChordRecord]


def export(layout: Layout) -> InterchangeDocument:
    """Project a layout into an interchange document, in authored order."""
    chords = [
        ChordRecord(
            hand=record.hand,
            fingers="".join(role.value for role in record.sorted_roles),
            output=record.output,
        )
        for record in layout
    ]
    return InterchangeDocument(chords=chords)


def dump_yaml(document: InterchangeDocument) -> str:
    return yaml.dump(
        document.model_dump(mode="json"),
        default_flow_style=None,
        allow_unicode=True,
        sort_keys=False,
    )


def dump_json(document: InterchangeDocument) -> str:
    return json.dumps(document.model_dump(mode="json"), indent=2, ensure_ascii=False) + "\n"


def load_document(text: str) -> Result[Layout, ParseError]:
    """Read an exported YAML or JSON document back into a Layout.

    JSON is a subset of YAML, so one loader handles both. Errors are
    reported with line 0 since document records carry no source lines.
    """
    try:
        data = yaml.safe_load(text) or {}
        document = InterchangeDocument.model_validate(data)
    except (yaml.YAMLError, ValidationError) as e:
        return Err(ParseError(0, f"invalid interchange document: {e}"))

    records = []
    for position, chord in enumerate(document.chords, start=1):
        try:
            roles = [FingerRole(letter) for letter in chord.fingers]
        except ValueError:
            return Err(ParseError(position, "unrecognized token", chord.fingers))
        if not roles:
            return Err(ParseError(position, "empty chord", chord.fingers))
        if len(set(roles)) != len(roles):
            return Err(ParseError(position, "duplicate finger in chord", chord.fingers))
        try:
            record = ChordDefinition(
                hand=chord.hand, roles=frozenset(roles), output=chord.output, line=position
            )
        except ValidationError:
            return Err(ParseError(position, "invalid output key", chord.output))
        records.append(record)
    return Ok(Layout(records))


def _finger_expr(record: ChordDefinition, numeric: bool) -> str:
    if numeric:
        mask = 0
        for key in record.keys:
            mask |= key.mask
        return f"0b{mask:016b}"
    return " | ".join(f"Finger::{key.value} as u16" for key in record.sorted_keys)


def _key_variant(output: str) -> str:
    """Key enum variant for an output; letters are upper-case variants."""
    if len(output) == 1 and output.isalpha():
        return output.upper()
    return output


def to_keychordz(layout: Layout, numeric: bool = False) -> str:
    """Render the keychordz firmware chord table.

    Args:
        layout: Layout to render, in authored order
        numeric: Write finger sets as 16-bit masks instead of Finger::* terms

    Outputs that cannot be written as a Key variant are skipped.
    """
    out = ""
    for record in layout:
        if not RUST_IDENT.match(record.output):
            logger.warning("could not map key %r on line %d", record.output, record.line)
            continue
        out += f"Chord::new({_finger_expr(record, numeric)}, Key::{_key_variant(record.output)}),\n"
    return out


def to_qmk_keymap(layout: Layout) -> Result[str, str]:
    """Render the LAYOUT_keychordz block from the single-key chords."""
    lookup = check_single_keys(layout)
    if isinstance(lookup, Err):
        return lookup
    keys = lookup.value

    # Physical order: left fingers, right fingers mirrored, then thumbs
    left_fingers = keys[0:4]
    left_thumbs = keys[4:7]
    right_fingers = list(reversed(keys[7:11]))
    right_thumbs = keys[11:14]

    out = "[0] = LAYOUT_keychordz(\n"
    out += "    " + ", ".join(left_fingers) + ",    " + ", ".join(right_fingers) + ", \\\n"
    out += "    " + ", ".join(left_thumbs) + ",    " + ", ".join(right_thumbs) + " \\\n"
    out += "    )"
    return Ok(out)


def to_qmk_combos(layout: Layout) -> Result[str, str]:
    """Render QMK combo definitions for every multi-key chord.

    Combos are expressed in terms of the keycodes the single-key chords
    put on each physical key.
    """
    lookup = check_single_keys(layout)
    if isinstance(lookup, Err):
        return lookup
    keys = lookup.value

    progmem_out = ""
    key_combos_out = "combo_t key_combos[COMBO_COUNT] = {\n"
    combo_count = 0
    for i, record in enumerate(layout):
        if len(record.roles) < 2:
            continue
        members = "".join(f" {keys[key.index]}," for key in record.sorted_keys)
        progmem_out += f"const uint16_t PROGMEM combo_{i}[] = {{{members} COMBO_END}};\n"
        key_combos_out += f"    COMBO(combo_{i}, {record.output}),\n"
        combo_count += 1
    key_combos_out += "};\n"

    logger.debug("rendered %d combos", combo_count)
    return Ok(f"{progmem_out}\n\n{key_combos_out}\n\nComboCount = {combo_count}")
