"""Named geometry constants for bubble, cut and frame construction.

All values in canvas units (CSS pixels).
"""

# Bubble tail
TAIL_BASE_WIDTH = 20.0            # width of the tail where it meets the edge
BUBBLE_CORNER_RADIUS = 16.0       # default rounded-corner radius
SIDE_TIE_TOLERANCE = 0.1          # |t - |tX|| below this puts the tail on left/right

# Occluders
MASK_EXTENT = 20000.0             # half-plane mask reach, beyond any canvas
FRAME_WALL_EXTENT = 10000.0       # half-size of the opaque wall around a frame

# Flattening
QUAD_FLATTEN_STEPS = 8            # chords per quadratic corner
