import argparse
import random
import sys

import pygame

from engine.config import *
from engine.core.battle_actor import BattleActor, BattleParty
from engine.ui.message_window import MessageWindow
from engine.ui.text_layout import normalize_wrap_style
from engine.utils.logger import Logger, LogLevel
from plugins.plugin_system import PluginManager

INTRO_TEXT = ("\\C[6]Three wanderers\\C[0] step into the ruined hall. "
              "Something stirs in the dark beyond the broken pillars \\I[64] and the air "
              "grows cold.\\| Press A to trade blows, SPACE to continue, hold SHIFT to skip ahead.")


class BattleDemo:
    def __init__(self, wrap_style: str = None):
        pygame.init()
        self.screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
        pygame.display.set_caption("Threat & Word Wrap")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont(FONT_FAMILY, FONT_SIZE)

        self.plugin_manager = PluginManager()
        self.plugin_manager.load_all_plugins()
        self.events = self.plugin_manager.event_system

        self.party = BattleParty([
            BattleActor("Harold", level=5, target_rate=1.5),
            BattleActor("Therese", level=4, target_rate=1.0),
            BattleActor("Marsha", level=4, target_rate=0.5, pha=1.5),
        ])
        for actor in self.party.members:
            self.events.publish("battle_actor_setup", {"actor": actor})

        self.window = MessageWindow(self.font, SCREEN_WIDTH, MESSAGE_WINDOW_HEIGHT)
        self.plugin_manager.call_hook("message_window_created", self.window)
        if wrap_style:
            word_wrap = self.plugin_manager.get_plugin("word_wrap_plugin")
            if word_wrap:
                word_wrap.wrap_style = normalize_wrap_style(wrap_style)
                word_wrap.attach(self.window)

        self.events.publish("show_message", {"text": INTRO_TEXT})

    def play_round(self):
        alive = self.party.alive_members()
        if not alive:
            self.events.publish("show_message", {"text": "The party has fallen."})
            return
        attacker = random.choice(alive)
        damage = random.randint(20, 60)
        self.events.publish("battle_damage_executed", {"subject": attacker, "value": damage})

        targets = [t for t in self.plugin_manager.call_hook("select_enemy_target", self.party) if t]
        target = targets[0] if targets else None
        if target is None:
            return
        evaded = random.random() < 0.25
        self.events.publish("battle_action_applied", {"target": target, "evaded": evaded})
        if evaded:
            outcome = "but it slips aside!"
        else:
            wound = target.take_damage(random.randint(10, 40))
            outcome = f"and strikes true for {wound}."
            if not target.is_alive:
                outcome += f" {target.name} falls!"
        self.events.publish("show_message", {
            "text": f"{attacker.name} deals {damage} damage. The shade turns on {target.name} {outcome}"
        })

    def run(self):
        running = True
        while running:
            self.clock.tick(TARGET_FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_SPACE:
                        self.window.acknowledge()
                    elif event.key == pygame.K_a and not self.window.is_busy:
                        self.play_round()

            self.window.set_show_fast(bool(pygame.key.get_mods() & pygame.KMOD_SHIFT))
            self.window.update()
            self.draw()

        self.plugin_manager.unload_all_plugins()
        pygame.quit()
        sys.exit()

    def draw(self):
        self.screen.fill((0, 0, 0))
        row_height = self.font.get_linesize() + LINE_SPACING
        for i, actor in enumerate(self.party.members):
            rect = pygame.Rect(SCREEN_WIDTH - 360, 40 + i * row_height, 320, row_height)
            self.plugin_manager.call_hook("draw_battle_status", self.screen, self.font, rect, actor)
        self.window.render(self.screen, (0, SCREEN_HEIGHT - MESSAGE_WINDOW_HEIGHT))
        pygame.display.flip()


def main():
    parser = argparse.ArgumentParser(description='Threat and word wrap demo')
    parser.add_argument('--wrap-style', '-w', type=str, default=None,
                        help='Override the word wrap style (break-word, break-all, strict)')
    parser.add_argument('--debug', action='store_true', help='Show debug logging')
    args = parser.parse_args()

    if args.debug:
        Logger.set_level(LogLevel.DEBUG)

    BattleDemo(args.wrap_style).run()

if __name__ == "__main__":
    main()
