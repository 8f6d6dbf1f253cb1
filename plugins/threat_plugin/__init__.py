"""
plugins/threat_plugin/__init__.py
Threat plugin for battles.
Turns combat results into threat for party members and lets enemies pick
their targets by it.
"""
import random
from typing import Any, Dict, Callable, Optional

from engine.core.threat_system import ThreatSystem
from plugins.plugin_system import PluginBase


class ThreatPlugin(PluginBase):
    """MMO-style threat generation."""

    plugin_id = "threat_plugin"
    plugin_name = "Threat System"

    def __init__(self, event_system=None):
        super().__init__(event_system)
        seed = self.config.get("seed")
        self.rng = random.Random(seed) if seed is not None else None

    def _handlers(self) -> Dict[str, Callable]:
        return {
            "battle_actor_setup": self._on_actor_setup,
            "battle_damage_executed": self._on_damage_executed,
            "battle_hp_recovered": self._on_hp_recovered,
            "battle_state_added": self._on_state_added,
            "battle_action_applied": self._on_action_applied,
        }

    def initialize(self):
        if self.event_system:
            for event_type, handler in self._handlers().items():
                self.event_system.subscribe(event_type, handler)

    def register_hooks(self, plugin_manager):
        plugin_manager.register_hook("select_enemy_target", self.random_target)
        plugin_manager.register_hook("select_ally_target", self.random_ally)
        plugin_manager.register_hook("draw_battle_status", self.draw_status)

    def random_target(self, party):
        """Target for an enemy action against the party."""
        return ThreatSystem.random_enemy_target(party, self.rng)

    def random_ally(self, party):
        """Target for a friendly action inside the party."""
        return ThreatSystem.random_ally_target(party, self.rng)

    def draw_status(self, surface, font, rect, actor):
        if not self.config.get("show_threat_in_status", True):
            return
        from engine.ui.threat_display import draw_basic_area
        draw_basic_area(surface, font, rect, actor)

    # --- Event Handlers ---

    def _on_actor_setup(self, event_type: str, data: Dict[str, Any]):
        ThreatSystem.setup(data["actor"])

    def _on_damage_executed(self, event_type: str, data: Dict[str, Any]):
        ThreatSystem.on_damage_executed(data["subject"], data["value"])

    def _on_hp_recovered(self, event_type: str, data: Dict[str, Any]):
        ThreatSystem.on_hp_recovered(
            data["subject"], data["target"],
            data.get("value1", 0), data.get("value2", 0),
            is_item=data.get("is_item", False)
        )

    def _on_state_added(self, event_type: str, data: Dict[str, Any]):
        ThreatSystem.on_state_added(
            data["subject"],
            item_threat=data.get("item_threat"),
            is_guard=data.get("is_guard", False),
            success=data.get("success", True)
        )

    def _on_action_applied(self, event_type: str, data: Dict[str, Any]):
        if data.get("evaded"):
            ThreatSystem.on_action_evaded(data["target"])

    def cleanup(self):
        if self.event_system:
            for event_type, handler in self._handlers().items():
                self.event_system.unsubscribe(event_type, handler)
