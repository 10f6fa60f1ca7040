"""Editing-session helpers for interactive layout testing.

The engine itself is stateless. A UI keeps its own pressed set (see
``toggle``) and one LayoutSession whose layout is replaced wholesale
whenever the layout text changes.
"""

import logging
import threading

from .checker import Diagnostic, check
from .config import LayoutSettings
from .keys import Key
from .layout import Layout
from .parser import ParseError, parse
from .result import Err, Ok, Result
from .resolver import Preview, ResolverInputError, preview

logger = logging.getLogger(__name__)


def toggle(pressed: frozenset[Key], key: Key) -> frozenset[Key]:
    """Return the pressed set with one key flipped."""
    if key in pressed:
        return pressed - {key}
    return pressed | {key}


class LayoutSession:
    """Holds the active layout for concurrent readers.

    Readers take a reference to the current Layout and work on it; reload
    swaps in a complete new Layout, so a reader sees either the old one or
    the new one.
    """

    def __init__(self, settings: LayoutSettings | None = None):
        self.settings = settings if settings is not None else LayoutSettings()
        self._layout = Layout()
        self._lock = threading.Lock()

    @property
    def layout(self) -> Layout:
        return self._layout

    def reload(self, text: str) -> Result[Layout, ParseError]:
        """Parse text and make it the active layout.

        On a parse error the previous layout stays active.
        """
        result = parse(text, self.settings.parse)
        if isinstance(result, Err):
            logger.info("layout reload rejected: %s", result.error)
            return result
        with self._lock:
            self._layout = result.value
        logger.info("layout reloaded with %d chords", len(result.value))
        return Ok(result.value)

    def check(self) -> list[Diagnostic]:
        return check(self._layout, self.settings.check)

    def preview(self, pressed: frozenset[Key]) -> Result[Preview, ResolverInputError]:
        return preview(self._layout, pressed)
