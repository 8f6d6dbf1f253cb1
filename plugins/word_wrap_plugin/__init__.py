"""
plugins/word_wrap_plugin/__init__.py
Word wrap plugin for message windows.
Automatically wraps overflowing dialogue text. The wrap style is read once
from the plugin config and handed to every window's reflow.
"""
from typing import Any, Optional

from engine.ui.text_layout import MessageHost, MessageReflow, normalize_wrap_style
from engine.utils.logger import Logger
from plugins.plugin_system import PluginBase


class WordWrapPlugin(PluginBase):
    """Word wrap for the message window."""

    plugin_id = "word_wrap_plugin"
    plugin_name = "Word Wrap"

    def __init__(self, event_system=None):
        super().__init__(event_system)
        self.wrap_style = normalize_wrap_style(self.config.get("word_wrap_style"))
        self.active_window = None

    def initialize(self):
        if self.event_system:
            self.event_system.subscribe("show_message", self._on_show_message)
        Logger.info("WordWrap", f"Word wrap style: {self.wrap_style}")

    def register_hooks(self, plugin_manager):
        plugin_manager.register_hook("message_window_created", self.attach)

    def create_reflow(self, host: MessageHost) -> MessageReflow:
        return MessageReflow(host, self.wrap_style)

    def attach(self, window) -> None:
        """Gives window a reflow using the configured style and reports its pauses and endings."""
        window.reflow = self.create_reflow(window)
        window.on_paused = lambda: self._publish("message_paused", window)
        window.on_finished = lambda: self._publish("message_finished", window)
        self.active_window = window

    def _publish(self, event_type: str, window) -> None:
        if self.event_system:
            self.event_system.publish(event_type, {"window": window})

    def _on_show_message(self, event_type: str, data: Any):
        text: Optional[str] = data.get("text") if isinstance(data, dict) else data
        if text is None:
            return
        if self.active_window is None:
            Logger.warning("WordWrap", "show_message received with no message window attached.")
            return
        self.active_window.start_message(text)

    def cleanup(self):
        if self.event_system:
            self.event_system.unsubscribe("show_message", self._on_show_message)
        if self.active_window is not None:
            self.active_window.on_paused = None
            self.active_window.on_finished = None
            self.active_window = None
