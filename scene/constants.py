"""Editor defaults for newly added shapes and the export document.

All values in canvas units (CSS pixels) unless noted.
"""

# Canvas
CANVAS_W, CANVAS_H = 1280, 800    # default export size when a scene has none

# Bubbles
DEFAULT_BUBBLE_WIDTH = 220.0
DEFAULT_BUBBLE_HEIGHT = 100.0
ANCHOR_DROP = 50.0                # new bubble's anchor sits this far below its box

# Cuts
DEFAULT_CUT_THICKNESS = 10.0
CUT_START = (0.3, 0.2)            # fractions of canvas width/height
CUT_END = (0.7, 0.8)

# Frames
FRAME_MARGIN = 100.0
DEFAULT_FRAME_COLOR = "#000000"

# Images
DEFAULT_IMAGE_SIZE = 256.0
IMAGE_GRID = 16.0                 # new images snap to this grid

# Export
BACKGROUND_COLOR = "#0f172a"
BUBBLE_FILL = "white"
CUT_FILL = "black"
TEXT_COLOR = "#0f172a"
SHADOW_RADIUS = 3                 # solid outline dilation around bubbles
FONT_FAMILY = "system-ui, sans-serif"

DEMO_TEXTS = [
    "Hello there! I'm a dynamic speech bubble.",
    "You can drag my body or my tail independently.",
    "I will automatically truncate my text if it gets too long for the container. "
    "This ensures the design never breaks even with overflow.",
    "Try moving the anchor point all the way around me. The tail logic generalizes to any angle!",
    "Python + SVG = <3",
]
