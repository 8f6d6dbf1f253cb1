# engine/ui/threat_display.py
"""
Draws each party member's share of threat on the battle status panel.
"""
import pygame
from typing import Tuple, Optional

from engine.config import (
    NORMAL_COLOR, CRISIS_COLOR, THREAT_CRISIS_PERCENTAGE,
    THREAT_DISPLAY_WIDTH, THREAT_STATUS_OFFSET
)
from engine.core.threat_system import ThreatSystem


def threat_color(percentage: int) -> Tuple[int, int, int]:
    if percentage >= THREAT_CRISIS_PERCENTAGE:
        return CRISIS_COLOR
    return NORMAL_COLOR


def draw_actor_threat(surface: pygame.Surface, font: pygame.font.Font, actor,
                      x: int, y: int, width: Optional[int] = None) -> pygame.Rect:
    """Renders "<pct>%" clipped to width. Returns the area drawn."""
    if width is None:
        width = THREAT_DISPLAY_WIDTH
    width = max(0, width)
    percentage = ThreatSystem.threat_percentage(actor)
    text_surface = font.render(f"{percentage}%", True, threat_color(percentage))
    area = pygame.Rect(0, 0, min(width, text_surface.get_width()), text_surface.get_height())
    return surface.blit(text_surface, (x, y), area)


def draw_basic_area(surface: pygame.Surface, font: pygame.font.Font,
                    rect: pygame.Rect, actor) -> None:
    """One battle status row: the actor's name, then its threat share."""
    name_surface = font.render(actor.name, True, NORMAL_COLOR)
    name_area = pygame.Rect(0, 0, min(THREAT_STATUS_OFFSET, name_surface.get_width()), name_surface.get_height())
    surface.blit(name_surface, (rect.x, rect.y), name_area)
    # Rows narrower than the name column leave no room for the threat
    draw_actor_threat(surface, font, actor, rect.x + THREAT_STATUS_OFFSET, rect.y,
                      max(0, rect.width - THREAT_STATUS_OFFSET))
