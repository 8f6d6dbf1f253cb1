"""
plugins/plugin_system.py
Plugin system for the battle and message extensions.
Provides infrastructure for loading and managing plugins.
"""
import importlib
import inspect
import json
import os
from typing import Dict, List, Any, Callable, Optional

from engine.utils.logger import Logger
from plugins.event_system import EventSystem

PLUGIN_PATH = os.path.dirname(os.path.abspath(__file__))


class PluginBase:
    plugin_id = "base_plugin"
    plugin_name = "Base Plugin"

    def __init__(self, event_system: Optional[EventSystem] = None):
        self.event_system = event_system
        self.config = self.load_config()

    def load_config(self) -> Dict[str, Any]:
        """DEFAULT_CONFIG from the plugin's config.py, overridden by an optional config.json beside it."""
        try:
            config_module = importlib.import_module(f"plugins.{self.plugin_id}.config")
            config = dict(getattr(config_module, "DEFAULT_CONFIG", {}))
        except ImportError:
            config = {}

        config_path = os.path.join(PLUGIN_PATH, self.plugin_id, "config.json")
        if os.path.exists(config_path):
            try:
                with open(config_path, 'r') as f:
                    config.update(json.load(f))
            except (OSError, ValueError) as e:
                Logger.error("Plugins", f"Error loading config for {self.plugin_id}: {e}")

        return config

    def initialize(self):
        pass

    def cleanup(self):
        pass


class PluginManager:
    def __init__(self, event_system: Optional[EventSystem] = None):
        self.plugins: Dict[str, Any] = {}  # Plugin ID to instance mapping
        self.hooks: Dict[str, List[Callable]] = {}  # Hook name to callbacks
        self.event_system = event_system or EventSystem()
        self.plugin_path = PLUGIN_PATH

    def register_hook(self, hook_name: str, callback: Callable) -> None:
        self.hooks.setdefault(hook_name, []).append(callback)

    def call_hook(self, hook_name: str, *args, **kwargs) -> List[Any]:
        results = []
        for callback in self.hooks.get(hook_name, []):
            try:
                results.append(callback(*args, **kwargs))
            except Exception as e:
                Logger.error("Plugins", f"Error in plugin hook {hook_name}: {e}")
        return results

    def discover_plugins(self) -> List[str]:
        plugin_modules = []
        for dirname in sorted(os.listdir(self.plugin_path)):
            full_dir_path = os.path.join(self.plugin_path, dirname)
            init_file = os.path.join(full_dir_path, "__init__.py")

            # A plugin is a package directory
            if os.path.isdir(full_dir_path) and os.path.exists(init_file) and dirname != "__pycache__":
                plugin_modules.append(dirname)

        Logger.debug("Plugins", f"Discovered plugin modules: {plugin_modules}")
        return plugin_modules

    def load_plugin(self, plugin_name: str) -> bool:
        try:
            module = importlib.import_module(f"plugins.{plugin_name}")
        except ImportError as e:
            Logger.error("Plugins", f"Error loading plugin {plugin_name}: {e}")
            return False

        # Find the plugin class
        plugin_class = None
        for name, obj in inspect.getmembers(module):
            if (inspect.isclass(obj) and
                hasattr(obj, "plugin_id") and
                obj.__module__ == module.__name__):
                plugin_class = obj
                break

        if plugin_class is None:
            Logger.warning("Plugins", f"No plugin class found in {plugin_name}")
            return False

        if plugin_class.plugin_id in self.plugins:
            Logger.debug("Plugins", f"Plugin {plugin_class.plugin_id} is already loaded")
            return True

        # Inject only what the constructor asks for
        params = inspect.signature(plugin_class.__init__).parameters
        kwargs = {}
        if "event_system" in params:
            kwargs["event_system"] = self.event_system
        if "plugin_manager" in params:
            kwargs["plugin_manager"] = self

        plugin = plugin_class(**kwargs)
        plugin.initialize()
        self.plugins[plugin.plugin_id] = plugin

        if hasattr(plugin, "register_hooks"):
            plugin.register_hooks(self)

        Logger.info("Plugins", f"Loaded plugin: {plugin.plugin_id}")
        self.event_system.publish("plugin_loaded", {
            "plugin_id": plugin.plugin_id,
            "plugin_name": getattr(plugin, "plugin_name", plugin.plugin_id)
        })
        return True

    def load_all_plugins(self) -> None:
        for plugin_name in self.discover_plugins():
            self.load_plugin(plugin_name)

    def unload_plugin(self, plugin_id: str) -> bool:
        if plugin_id not in self.plugins:
            return False

        plugin = self.plugins.pop(plugin_id)
        plugin.cleanup()

        # Remove hooks bound to this plugin
        for hook_name, callbacks in self.hooks.items():
            self.hooks[hook_name] = [cb for cb in callbacks
                                     if getattr(cb, "__self__", None) is not plugin]

        self.event_system.publish("plugin_unloaded", {"plugin_id": plugin_id})
        Logger.info("Plugins", f"Unloaded plugin: {plugin_id}")
        return True

    def unload_all_plugins(self) -> None:
        for plugin_id in list(self.plugins.keys()):
            self.unload_plugin(plugin_id)

    def get_plugin(self, plugin_id: str) -> Optional[Any]:
        return self.plugins.get(plugin_id)
