"""
plugins/event_system.py
Event system for the battle and message plugins.
Provides a centralized way for plugins and game components to communicate.
"""
from typing import Dict, List, Any, Callable, Optional, Set

from engine.utils.logger import Logger


class EventSystem:
    """
    Centralized event system for game-wide communication.
    
    The host engine publishes what happened (damage dealt, a message to show)
    and plugins react without the host knowing which plugins are loaded.
    """
    
    def __init__(self):
        """Initialize the event system."""
        self.subscribers: Dict[str, List[Callable]] = {}
        self.event_history: Dict[str, Any] = {}  # Last value for each event type
    
    def subscribe(self, event_type: str, callback: Callable) -> None:
        """
        Subscribe to an event type.
        
        Args:
            event_type: The type of event to subscribe to.
            callback: Called as callback(event_type, data).
        """
        callbacks = self.subscribers.setdefault(event_type, [])
        if callback not in callbacks:
            callbacks.append(callback)
    
    def unsubscribe(self, event_type: str, callback: Callable) -> None:
        if event_type in self.subscribers and callback in self.subscribers[event_type]:
            self.subscribers[event_type].remove(callback)
            
            # Clean up empty event types
            if not self.subscribers[event_type]:
                self.subscribers.pop(event_type)
    
    def publish(self, event_type: str, data: Any = None) -> int:
        """
        Publish an event to every subscriber. A failing subscriber is logged
        and does not stop the others.
        
        Returns:
            The number of callbacks that completed.
        """
        self.event_history[event_type] = data
        
        delivered = 0
        # Copy so callbacks may unsubscribe while we iterate
        for callback in list(self.subscribers.get(event_type, [])):
            try:
                callback(event_type, data)
                delivered += 1
            except Exception as e:
                Logger.warning("Events", f"Error in event callback for {event_type}: {e}")
        return delivered
    
    def get_last_event_data(self, event_type: str, default: Any = None) -> Any:
        return self.event_history.get(event_type, default)
    
    def clear_history(self, event_types: Optional[Set[str]] = None) -> None:
        """
        Clear event history.
        
        Args:
            event_types: Set of event types to clear. If None, clear all.
        """
        if event_types is None:
            self.event_history.clear()
        else:
            for event_type in event_types:
                self.event_history.pop(event_type, None)
