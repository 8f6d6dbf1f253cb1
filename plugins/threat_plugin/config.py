"""
plugins/threat_plugin/config.py
Default configuration for the Threat plugin.
"""

DEFAULT_CONFIG = {
    # Seed for enemy target selection. None uses the global random module.
    "seed": None,

    # Draw each member's threat share on the battle status rows
    "show_threat_in_status": True,
}
