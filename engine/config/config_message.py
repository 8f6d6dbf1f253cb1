# engine/config/config_message.py
"""
Configuration for message layout and pacing.
"""

# --- Word Wrap Styles ---
WRAP_BREAK_WORD = "break-word"  # Move a whole word to the next line
WRAP_BREAK_ALL = "break-all"    # No word lookahead (incomplete, see DESIGN.md)
WRAP_STRICT = "strict"          # Per-character check with a 2x width margin
WRAP_STYLES = (WRAP_BREAK_WORD, WRAP_BREAK_ALL, WRAP_STRICT)
DEFAULT_WRAP_STYLE = WRAP_BREAK_WORD

# --- Pacing (frames) ---
WAIT_FRAMES_SHORT = 15  # \.
WAIT_FRAMES_LONG = 60   # \|

# Codepoints below this are control characters handed to the host
CONTROL_CHARACTER_LIMIT = 0x20
