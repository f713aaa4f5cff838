"""Default configuration values shared across the analyzer, CLI, and batch runs."""

# Target crop dimensions
TARGET_WIDTH = 100
TARGET_HEIGHT = 100

# Prescaling
PRESCALE = True
PRESCALE_MIN = 400.0  # shorter image side is shrunk to this before analysis

# Candidate sweep
MIN_SCALE = 1.0
MAX_SCALE = 1.0
STEP = 8.0  # grid step in prescaled pixels
SCALE_STEP = 0.1

# Scoring
SCORE_DOWN_SAMPLE = 8
OUTSIDE_IMPORTANCE = -0.5
EDGE_RADIUS = 0.4
EDGE_WEIGHT = -20.0
RULE_OF_THIRDS = True

DETAIL_WEIGHT = 0.2

# Skin detection
SKIN_COLOR = (0.78, 0.57, 0.44)  # (234, 171, 132) normalised, divided by 0.942
SKIN_WEIGHT = 1.8
SKIN_BRIGHTNESS_MIN = 0.2
SKIN_BRIGHTNESS_MAX = 1.0
SKIN_THRESHOLD = 0.8
SKIN_BIAS = 0.01

# Saturation detection
SATURATION_WEIGHT = 0.1
SATURATION_BRIGHTNESS_MIN = 0.05
SATURATION_BRIGHTNESS_MAX = 0.9
SATURATION_THRESHOLD = 0.4
SATURATION_BIAS = 0.2

# Cropping
STRATEGY = 'smart'
RESIZE_TO_TARGET = True

# Output
JPEG_QUALITY = 95
WORKERS = 4
