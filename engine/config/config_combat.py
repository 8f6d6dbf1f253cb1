# engine/config/config_combat.py
"""
Configuration for battle threat (aggro) generation and targeting.
"""

# --- Threat Generation ---
THREAT_PER_LEVEL = 100          # Starting threat = level * THREAT_PER_LEVEL * target rate
DEFAULT_THREAT_PER_LEVEL = 50   # Used by add_default_threat (states without their own value)
EVADE_THREAT_PER_LEVEL = 50     # Removed from an actor that evades an enemy action

# --- Threat Gating ---
# add_threat stops accumulating once an actor holds this share of party threat.
# The check happens before the increment, so one large hit can still overshoot.
THREAT_GATE_PERCENTAGE = 99

# --- Threat Display ---
THREAT_CRISIS_PERCENTAGE = 75
