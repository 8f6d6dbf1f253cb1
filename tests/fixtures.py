# tests/fixtures.py
import io
import os
import sys
import unittest
from typing import List, Tuple, Dict, Optional

# Get the absolute path to the project root (one level up from tests/)
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))

# Insert root into sys.path so we can import 'engine' and 'plugins'
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

# pygame must not try to open a real window during tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from engine.core.battle_actor import BattleActor, BattleParty
from engine.ui.escape_codes import ESCAPE, obtain_escape_code, obtain_escape_param, strip_escape_codes
from engine.ui.text_layout import MessageHost, MessageReflow, TextState
from engine.utils.logger import Logger, LogLevel

CHAR_WIDTH = 10
LINE_HEIGHT = 36
ICON_CELL = 32 + 4


class FakeMessageHost(MessageHost):
    """
    A headless message window: every character is CHAR_WIDTH pixels wide and
    every line LINE_HEIGHT tall. Records what would have been drawn, page by page.
    """
    icon_width = 32

    def __init__(self, width: int, lines: int = 4, wrap_style: Optional[str] = "break-word",
                 show_fast: bool = True):
        self.contents_width = width
        self.contents_height = lines * LINE_HEIGHT
        self.pages: List[List[Tuple[str, float, float]]] = []
        self.icons: List[Tuple[int, float, float]] = []
        self.pauses = 0
        self.finished = 0
        self.on_paused = None
        self.on_finished = None
        self.reflow = MessageReflow(self, wrap_style)
        self.reflow.show_fast = show_fast

    def start_message(self, text: str) -> TextState:
        return self.reflow.start_message(text)

    def run(self, max_frames: int = 10000) -> int:
        """Updates until the reflow has nothing left to do this page. Returns frames used."""
        frames = 0
        while self.reflow.update():
            frames += 1
            if frames > max_frames:
                raise AssertionError("Message layout did not settle")
        return frames

    # --- Inspection ---

    @property
    def draws(self) -> List[Tuple[str, float, float]]:
        return [draw for page in self.pages for draw in page]

    def lines(self, page: int = -1) -> List[str]:
        """Text of each line on a page, top to bottom."""
        rows: Dict[float, str] = {}
        for text, x, y in self.pages[page]:
            rows[y] = rows.get(y, "") + text
        return [rows[y] for y in sorted(rows)]

    def all_lines(self) -> List[str]:
        return [line for i in range(len(self.pages)) for line in self.lines(i)]

    # --- MessageHost ---

    def text_width(self, text: str) -> float:
        return len(text) * CHAR_WIDTH

    def calc_text_height(self, text_state: TextState) -> float:
        return LINE_HEIGHT

    def printable_text(self, text: str) -> str:
        return strip_escape_codes(text)

    def draw_text(self, text: str, x: float, y: float, height: float) -> None:
        self.pages[-1].append((text, x, y))

    def draw_icon(self, icon_index: int, x: float, y: float) -> None:
        self.icons.append((icon_index, x, y))

    def process_control_character(self, text_state: TextState, c: str) -> None:
        if c == ESCAPE:
            code, text_state.index = obtain_escape_code(text_state.text, text_state.index)
            param, text_state.index = obtain_escape_param(text_state.text, text_state.index)
            if code == "I":
                self.reflow.process_draw_icon(param, text_state)
        else:
            super().process_control_character(text_state, c)

    def on_new_page(self, text_state: TextState, resuming: bool) -> None:
        self.pages.append([])

    def start_pause(self) -> None:
        self.pauses += 1
        if self.on_paused:
            self.on_paused()

    def on_end_of_text(self) -> None:
        self.finished += 1
        if self.on_finished:
            self.on_finished()


class QuietTestCase(unittest.TestCase):
    """Captures engine log output instead of printing it."""

    def setUp(self):
        self.log_output = io.StringIO()
        self._old_level = Logger.get_level()
        Logger.set_stream(self.log_output)
        Logger.set_level(LogLevel.DEBUG)

    def tearDown(self):
        Logger.set_stream(None)
        Logger.set_level(self._old_level)


class PartyTestBase(QuietTestCase):
    """A three-member party with hand-set threat."""

    def setUp(self):
        super().setUp()
        self.tank = BattleActor("Harold", level=5, target_rate=2.0)
        self.healer = BattleActor("Therese", level=4, target_rate=1.0)
        self.mage = BattleActor("Marsha", level=4, target_rate=0.5, pha=1.5)
        self.party = BattleParty([self.tank, self.healer, self.mage])
