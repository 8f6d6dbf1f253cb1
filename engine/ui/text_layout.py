# engine/ui/text_layout.py
"""
Incremental message layout with automatic word wrap.

A message is laid out a few characters per frame. Printable characters are
buffered on the current line and drawn in runs; control characters flush the
buffer and are handed to the host window. Before a character is placed the
reflow decides whether it still fits on the line, and moves to a new line (or
pauses for a new page) when it does not.

The host window supplies measurement and drawing through MessageHost; the
reflow never touches fonts or surfaces itself.
"""
import bisect
import math
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Any

from engine.config import (
    ICON_WIDTH, ICON_PADDING, CONTROL_CHARACTER_LIMIT,
    WRAP_BREAK_WORD, WRAP_BREAK_ALL, WRAP_STRICT, WRAP_STYLES, DEFAULT_WRAP_STYLE
)
from engine.core.errors import FontMetricsError, MessageStateError
from engine.utils.logger import Logger

WORD_PATTERN = re.compile(r'\S+')


def get_word_boundaries(text: str) -> List[int]:
    """Start offsets of every run of non-whitespace characters, ascending."""
    return [match.start() for match in WORD_PATTERN.finditer(text)]


def normalize_wrap_style(style: Optional[str]) -> str:
    if style is None:
        return DEFAULT_WRAP_STYLE
    if style not in WRAP_STYLES:
        Logger.warning("Reflow", f"Unknown word wrap style '{style}', using per-character wrapping.")
        return WRAP_STRICT
    return style


class ReflowState(Enum):
    IDLE = "idle"
    LAYING_OUT = "laying_out"
    PAUSED = "paused"


@dataclass
class TextState:
    """Layout state for one displayed message."""
    text: str
    word_boundaries: List[int] = field(default_factory=list)
    index: int = 0
    x: float = 0
    y: float = 0
    left: float = 0  # Line start for wraps and newlines on this page
    height: float = 0
    buffer: str = ""
    # Overflow decisions already taken, so a resumed page does not repeat them
    checked_word: int = -1
    wrapped_index: int = -1
    deferred_icon: Optional[int] = None

    @property
    def is_end(self) -> bool:
        return self.index >= len(self.text)

    def word_starting_at(self, index: int) -> Optional[int]:
        """Ordinal of the word that begins exactly at index, if any."""
        pos = bisect.bisect_left(self.word_boundaries, index)
        if pos < len(self.word_boundaries) and self.word_boundaries[pos] == index:
            return pos
        return None

    def word_containing(self, index: int) -> Optional[int]:
        pos = bisect.bisect_right(self.word_boundaries, index) - 1
        if pos < 0:
            return None
        if index >= self.word_boundaries[pos] + len(self.word_text(pos)):
            return None
        return pos

    def word_text(self, ordinal: int, start: Optional[int] = None) -> str:
        """The word's characters from start (default: its first) up to the next word, trailing whitespace dropped."""
        begin = self.word_boundaries[ordinal] if start is None else start
        if ordinal + 1 < len(self.word_boundaries):
            end = self.word_boundaries[ordinal + 1]
        else:
            end = len(self.text)
        return self.text[begin:end].rstrip()


class MessageHost:
    """
    What a message window provides to MessageReflow. Subclasses must set
    contents_width / contents_height and implement text_width and
    calc_text_height; everything else has a usable default.
    """
    contents_width: float = 0
    contents_height: float = 0
    icon_width: int = ICON_WIDTH

    def text_width(self, text: str) -> float:
        raise NotImplementedError

    def calc_text_height(self, text_state: TextState) -> float:
        raise NotImplementedError

    def new_line_x(self, text_state: TextState) -> float:
        return 0

    def printable_text(self, text: str) -> str:
        """Text with control sequences removed, as it would be drawn."""
        return text

    def draw_text(self, text: str, x: float, y: float, height: float) -> None:
        pass

    def draw_icon(self, icon_index: int, x: float, y: float) -> None:
        pass

    def process_control_character(self, text_state: TextState, c: str) -> None:
        if c == "\n":
            self.process_new_line(text_state)

    def process_new_line(self, text_state: TextState) -> None:
        text_state.x = text_state.left
        text_state.y += text_state.height
        text_state.height = self.calc_text_height(text_state)

    def on_new_page(self, text_state: TextState, resuming: bool) -> None:
        pass

    def start_pause(self) -> None:
        pass

    def is_waiting(self) -> bool:
        return False

    def on_end_of_text(self) -> None:
        pass


class MessageReflow:
    """
    Drives one message window's text layout.

    Idle -> start_message() -> laying out, a slice per update() call ->
    paused when a wrap or newline runs off the page -> resume() on player
    input -> ... -> idle once the text is consumed.
    """

    def __init__(self, host: MessageHost, wrap_style: Optional[str] = DEFAULT_WRAP_STYLE):
        self.host = host
        self.wrap_style = normalize_wrap_style(wrap_style)
        self.text_state: Optional[TextState] = None
        self.pending_break = False
        self.show_fast = False
        self.line_show_fast = False

    @property
    def state(self) -> ReflowState:
        if self.text_state is None:
            return ReflowState.IDLE
        if self.pending_break:
            return ReflowState.PAUSED
        return ReflowState.LAYING_OUT

    @property
    def is_paused(self) -> bool:
        return self.pending_break

    # --- Message Lifecycle ---

    def start_message(self, text: str) -> TextState:
        if self.text_state is not None:
            if self.pending_break:
                Logger.warning("Reflow", "New message started while the previous one was paused; discarding it.")
            self.clear()

        text_state = TextState(text=text, word_boundaries=get_word_boundaries(text))
        self.text_state = text_state
        self.new_page(text_state)
        Logger.info("Reflow", f"Message started ({len(text)} chars, {len(text_state.word_boundaries)} words, {self.wrap_style}).")
        return text_state

    def resume(self) -> None:
        """Continues a paused message on a fresh page."""
        text_state = self.text_state
        if text_state is None or not self.pending_break:
            raise MessageStateError("resume() called with no paused message")
        self.new_page(text_state, resuming=True)
        self.pending_break = False
        if text_state.deferred_icon is not None:
            icon_index = text_state.deferred_icon
            text_state.deferred_icon = None
            self._draw_icon(text_state, icon_index)

    def clear(self) -> None:
        self.text_state = None
        self.pending_break = False
        self.line_show_fast = False

    def new_page(self, text_state: TextState, resuming: bool = False) -> None:
        self.host.on_new_page(text_state, resuming)
        text_state.left = self.host.new_line_x(text_state)
        text_state.x = text_state.left
        text_state.y = 0
        text_state.height = self._line_height(text_state)

    def needs_new_page(self, text_state: TextState) -> bool:
        return (not text_state.is_end and
                text_state.y + text_state.height > self.host.contents_height)

    # --- Per-Frame Drive ---

    def update(self) -> bool:
        """
        Lays out as much of the message as this frame allows.
        Returns False when there is nothing to do (idle or paused).
        """
        text_state = self.text_state
        if text_state is None or self.pending_break:
            return False

        while not text_state.is_end and not self.pending_break:
            if self.needs_new_page(text_state):
                self.new_page(text_state)
            self.process_character(text_state)
            if self.should_break_here(text_state):
                break

        self.flush_text_state(text_state)
        if text_state.is_end and not self.pending_break and not self.host.is_waiting():
            self.text_state = None
            Logger.info("Reflow", "Message finished.")
            self.host.on_end_of_text()
        return True

    def should_break_here(self, text_state: TextState) -> bool:
        if self.pending_break or self.host.is_waiting():
            return True
        if text_state.is_end:
            return False
        return not (self.show_fast or self.line_show_fast)

    def process_character(self, text_state: TextState) -> None:
        c = text_state.text[text_state.index]
        if ord(c) < CONTROL_CHARACTER_LIMIT:
            text_state.index += 1
            self.flush_text_state(text_state)
            self.host.process_control_character(text_state, c)
            if not self.pending_break and self.needs_new_page(text_state):
                # A manual newline (or taller line) left the cursor below the page
                self._raise_page_break(text_state, "control character")
            return

        is_overflow = self.process_overflow(text_state)
        suppressed = is_overflow and c.isspace()
        if self.pending_break and not suppressed:
            # This character now belongs on the next page
            return
        text_state.index += 1
        if not suppressed:
            text_state.buffer += c

    def process_overflow(self, text_state: TextState) -> bool:
        """Wraps before the character at text_state.index if it would not fit. Returns True on wrap."""
        max_width = self.host.contents_width
        x = self._pending_x(text_state)

        if self.wrap_style == WRAP_BREAK_WORD:
            width = self._unchecked_word_width(text_state)
            if width is None:
                return False
            if x >= max_width or x + width >= max_width:
                self.wrap_to_new_line(text_state, "word")
                return True
            return False

        # break-all has no lookahead of its own and shares the per-character check
        if text_state.index == text_state.wrapped_index:
            return False
        width = self._measure(text_state.text[text_state.index])
        if x >= max_width or x + (width * 2) >= max_width:
            text_state.wrapped_index = text_state.index
            self.wrap_to_new_line(text_state, "character")
            return True
        return False

    def process_draw_icon(self, icon_index: int, text_state: Optional[TextState] = None) -> None:
        """Places an icon, moving it whole to the next line if it does not fit."""
        text_state = text_state or self.text_state
        if text_state is None:
            raise MessageStateError("Cannot draw an icon with no active message")
        self.flush_text_state(text_state)

        max_width = self.host.contents_width
        icon_cell = self.host.icon_width + ICON_PADDING
        if text_state.x >= max_width or text_state.x + icon_cell >= max_width:
            # The icon is already consumed from the text, so it counts as content still to place
            self.wrap_to_new_line(text_state, "icon", pending_content=True)
            if self.pending_break:
                text_state.deferred_icon = icon_index
                return
        self._draw_icon(text_state, icon_index)

    def wrap_to_new_line(self, text_state: TextState, reason: str = "",
                         pending_content: bool = False) -> None:
        self.flush_text_state(text_state)
        self.line_show_fast = False
        text_state.x = text_state.left
        text_state.y += text_state.height
        text_state.height = self._line_height(text_state)
        Logger.debug("Reflow", f"Wrapped ({reason}) at index {text_state.index}, y={text_state.y}")
        off_page = text_state.y + text_state.height > self.host.contents_height
        if off_page and (pending_content or not text_state.is_end):
            self._raise_page_break(text_state, reason)

    def flush_text_state(self, text_state: TextState) -> None:
        if not text_state.buffer:
            return
        text = text_state.buffer
        width = self._measure(text)
        self.host.draw_text(text, text_state.x, text_state.y, text_state.height)
        text_state.x += width
        text_state.buffer = ""

    # --- Internals ---

    def _raise_page_break(self, text_state: TextState, reason: str) -> None:
        self.pending_break = True
        Logger.debug("Reflow", f"Page full ({reason}); waiting at index {text_state.index}")
        self.host.start_pause()

    def _draw_icon(self, text_state: TextState, icon_index: int) -> None:
        self.host.draw_icon(icon_index, text_state.x + 2, text_state.y + 2)
        text_state.x += self.host.icon_width + ICON_PADDING

    def _pending_x(self, text_state: TextState) -> float:
        if not text_state.buffer:
            return text_state.x
        return text_state.x + self._measure(text_state.buffer)

    def _unchecked_word_width(self, text_state: TextState) -> Optional[float]:
        """
        Width of the word about to start, or None when no word decision is due.
        Whitespace looks ahead to the word right after it, so the space can be
        dropped if that word wraps; any other character decides for the word it
        belongs to.
        """
        index = text_state.index
        if text_state.text[index].isspace():
            start = index + 1
            ordinal = text_state.word_starting_at(start)
        else:
            start = index
            ordinal = text_state.word_containing(index)
        if ordinal is None or ordinal == text_state.checked_word:
            return None
        text_state.checked_word = ordinal
        word = text_state.word_text(ordinal, start)
        return self._measure(self.host.printable_text(word))

    def _measure(self, text: str) -> float:
        try:
            width = self.host.text_width(text)
        except FontMetricsError:
            raise
        except Exception as e:
            raise FontMetricsError(f"Could not measure text {text!r}: {e}") from e
        return self._check_metric(width, f"width of {text!r}")

    def _line_height(self, text_state: TextState) -> float:
        try:
            height = self.host.calc_text_height(text_state)
        except FontMetricsError:
            raise
        except Exception as e:
            raise FontMetricsError(f"Could not calculate line height: {e}") from e
        return self._check_metric(height, "line height")

    @staticmethod
    def _check_metric(value: Any, what: str) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
            raise FontMetricsError(f"Invalid {what}: {value!r}")
        return value
