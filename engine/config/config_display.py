# engine/config/config_display.py
"""
Configuration for colors, fonts and window geometry.
"""

# --- Colors ---
NORMAL_COLOR = (255, 255, 255)
CRISIS_COLOR = (255, 255, 64)
BACKGROUND_COLOR = (20, 20, 40)
WINDOW_BORDER_COLOR = (140, 140, 180)

# Text colors selectable with \C[n] in messages
TEXT_COLORS = [
    (255, 255, 255), (32, 160, 214), (255, 120, 76), (102, 204, 64),
    (153, 204, 255), (204, 192, 255), (255, 255, 160), (128, 128, 128),
    (192, 192, 192), (32, 128, 204), (255, 56, 16), (0, 160, 16),
    (64, 154, 222), (160, 152, 255), (255, 204, 32), (0, 0, 0),
    (132, 170, 255), (255, 255, 64), (255, 32, 32), (32, 32, 64),
    (224, 128, 64), (240, 192, 64), (64, 128, 192), (64, 192, 240),
    (128, 255, 128), (192, 128, 128), (128, 128, 255), (255, 128, 255),
    (0, 160, 64), (0, 224, 96), (160, 96, 224), (192, 128, 255),
]

# --- Fonts ---
FONT_FAMILY = None  # pygame default font
FONT_SIZE = 26
LINE_SPACING = 4

# --- Icons ---
ICON_WIDTH = 32
ICON_HEIGHT = 32
ICON_PADDING = 4    # Extra horizontal room reserved when wrapping an icon
ICON_COLUMNS = 16   # Icons per row on the icon sheet

# --- Message Window ---
SCREEN_WIDTH = 816
SCREEN_HEIGHT = 624
MESSAGE_WINDOW_HEIGHT = 180
MESSAGE_WINDOW_PADDING = 12

# --- Battle Status ---
THREAT_DISPLAY_WIDTH = 168
THREAT_STATUS_OFFSET = 156

# --- Frame Rate ---
TARGET_FPS = 60
