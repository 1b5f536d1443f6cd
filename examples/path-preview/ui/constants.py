"""Layout constants and color definitions."""

# Timing
FPS = 60

# Layout dimensions
CANVAS_W = 800
CANVAS_H = 560
SIDEBAR_W = 180
STATUS_H = 36

SCREEN_W = CANVAS_W + SIDEBAR_W
SCREEN_H = CANVAS_H + STATUS_H

# Virtual image the waypoints are normalized against
IMAGE_W = 1600
IMAGE_H = 1000

# Markers
MAJOR_RADIUS = 7
MINOR_RADIUS = 4
MARKER_SIZE = 12
PAUSE_STEP_MS = 500
SPEED_STEP = 50

# Colors
BG_COLOR = (20, 20, 30)
CANVAS_BG = (28, 28, 42)
IMAGE_BG = (36, 36, 54)
SIDEBAR_BG = (25, 25, 38)
STATUS_BG = (35, 35, 50)
BORDER = (50, 50, 70)
TEXT_COLOR = (200, 200, 210)
TEXT_DIM = (120, 120, 140)
LABEL_COLOR = (180, 180, 200)
TRAIL_COLOR = (70, 70, 95)
MARKER_COLOR = (255, 255, 255)
WAYPOINT_COLOR = (255, 160, 40)
MINOR_COLOR = (160, 160, 180)
PAUSE_RING = (255, 90, 90)
FRAME_COLOR = (60, 60, 85)
FRAME_MARGIN = 16

# Path shape -> color
SHAPE_COLORS: dict[str, tuple[int, int, int]] = {
    "line": (0, 220, 220),
    "squiggle": (220, 80, 220),
    "randomised": (60, 220, 80),
}

# Playback status -> color
STATUS_COLORS: dict[str, tuple[int, int, int]] = {
    "stopped": (128, 128, 128),
    "playing": (100, 255, 100),
    "paused": (255, 200, 60),
    "waiting": (255, 90, 90),
}
