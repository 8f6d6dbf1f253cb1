# engine/ui/message_window.py
"""
Dialogue message window: lays text out with MessageReflow and draws it onto
an off-screen pygame surface that the renderer blits each frame.
"""
import pygame
from typing import Callable, Optional, Tuple

from engine.config import *
from engine.ui.escape_codes import (
    ESCAPE, convert_escape_characters, obtain_escape_code, obtain_escape_param, strip_escape_codes
)
from engine.ui.text_layout import MessageHost, MessageReflow, ReflowState, TextState
from engine.utils.logger import Logger


class MessageWindow(MessageHost):
    def __init__(self, font: pygame.font.Font, width: int, height: int,
                 wrap_style: Optional[str] = DEFAULT_WRAP_STYLE,
                 icon_sheet: Optional[pygame.Surface] = None,
                 padding: int = MESSAGE_WINDOW_PADDING,
                 line_spacing: int = LINE_SPACING):
        self.font = font
        self.width = width
        self.height = height
        self.padding = padding
        self.line_spacing = line_spacing
        self.icon_sheet = icon_sheet

        self.contents = pygame.Surface(
            (max(1, width - padding * 2), max(1, height - padding * 2)), pygame.SRCALPHA
        )
        self.contents_width = self.contents.get_width()
        self.contents_height = self.contents.get_height()

        self.text_color = NORMAL_COLOR
        self.pause = False
        self.wait_count = 0

        # Set by whoever owns the window (see word_wrap_plugin)
        self.on_paused: Optional[Callable[[], None]] = None
        self.on_finished: Optional[Callable[[], None]] = None

        self.reflow = MessageReflow(self, wrap_style)

    # --- Driving the Window ---

    def start_message(self, text: str) -> None:
        self.pause = False
        self.wait_count = 0
        self.reflow.start_message(convert_escape_characters(text))

    def update(self) -> None:
        """Called once per frame."""
        if self.wait_count > 0:
            self.wait_count -= 1
            return
        if self.pause:
            return
        self.reflow.update()

    def acknowledge(self) -> bool:
        """Player pressed confirm. Returns True if that released a pause."""
        if not self.pause:
            return False
        self.pause = False
        if self.reflow.is_paused:
            self.reflow.resume()
        return True

    def set_show_fast(self, show_fast: bool) -> None:
        self.reflow.show_fast = show_fast

    @property
    def is_busy(self) -> bool:
        return self.pause or self.reflow.state != ReflowState.IDLE

    def render(self, surface: pygame.Surface, position: Tuple[int, int]) -> None:
        x, y = position
        frame = pygame.Rect(x, y, self.width, self.height)
        pygame.draw.rect(surface, BACKGROUND_COLOR, frame)
        pygame.draw.rect(surface, WINDOW_BORDER_COLOR, frame, 2)
        surface.blit(self.contents, (x + self.padding, y + self.padding))

    def change_text_color(self, color_index: int) -> None:
        if 0 <= color_index < len(TEXT_COLORS):
            self.text_color = TEXT_COLORS[color_index]

    def reset_font_settings(self) -> None:
        self.text_color = NORMAL_COLOR

    # --- MessageHost ---

    def text_width(self, text: str) -> float:
        return self.font.size(text)[0]

    def calc_text_height(self, text_state: TextState) -> float:
        return self.font.get_linesize() + self.line_spacing

    def printable_text(self, text: str) -> str:
        return strip_escape_codes(text)

    def draw_text(self, text: str, x: float, y: float, height: float) -> None:
        text_surface = self.font.render(text, True, self.text_color)
        self.contents.blit(text_surface, (int(x), int(y)))

    def draw_icon(self, icon_index: int, x: float, y: float) -> None:
        if self.icon_sheet is None:
            pygame.draw.rect(self.contents, self.text_color,
                             pygame.Rect(int(x), int(y), ICON_WIDTH, ICON_HEIGHT), 1)
            return
        source = pygame.Rect(
            (icon_index % ICON_COLUMNS) * ICON_WIDTH,
            (icon_index // ICON_COLUMNS) * ICON_HEIGHT,
            ICON_WIDTH, ICON_HEIGHT
        )
        self.contents.blit(self.icon_sheet, (int(x), int(y)), source)

    def process_control_character(self, text_state: TextState, c: str) -> None:
        if c == "\n":
            self.process_new_line(text_state)
        elif c == ESCAPE:
            code, text_state.index = obtain_escape_code(text_state.text, text_state.index)
            self.process_escape_character(code, text_state)

    def process_escape_character(self, code: str, text_state: TextState) -> None:
        if code == "C":
            color_index, text_state.index = obtain_escape_param(text_state.text, text_state.index)
            self.change_text_color(color_index)
        elif code == "I":
            icon_index, text_state.index = obtain_escape_param(text_state.text, text_state.index)
            if icon_index >= 0:
                self.reflow.process_draw_icon(icon_index, text_state)
        elif code == ".":
            self.wait_count = WAIT_FRAMES_SHORT
        elif code == "|":
            self.wait_count = WAIT_FRAMES_LONG
        elif code == "!":
            self.start_pause()
        elif code == ">":
            self.reflow.line_show_fast = True
        elif code == "<":
            self.reflow.line_show_fast = False
        else:
            Logger.debug("MessageWindow", f"Ignoring escape code '{code}'")

    def on_new_page(self, text_state: TextState, resuming: bool) -> None:
        self.contents.fill((0, 0, 0, 0))
        if not resuming:
            self.reset_font_settings()

    def start_pause(self) -> None:
        self.pause = True
        if self.on_paused:
            self.on_paused()

    def is_waiting(self) -> bool:
        return self.pause or self.wait_count > 0

    def on_end_of_text(self) -> None:
        if self.on_finished:
            self.on_finished()
