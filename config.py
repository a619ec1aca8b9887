# config.py - Central configuration for the map migrator calibration core

# Pivots and determinants smaller than this are treated as zero (absolute, not scaled)
SINGULAR_EPSILON = 1e-10

# Anomaly detection limits
MAX_SCALE = 5.0
MIN_SCALE = 0.2
MAX_SHEAR = 0.5  # cosine of the angle between transformed axes (~60 degrees)

# Point distribution: covered area / bounding box area must exceed this
MIN_AREA_RATIO = 0.1

# Point suggestions: a corner counts as covered within this fraction of min(width, height)
CORNER_PROXIMITY = 0.1

# RMSE grading, in pixels
RMSE_GOOD = 5.0
RMSE_WARNING = 15.0

# Fit assessment warnings
UNEQUAL_SCALE_RATIO = 0.1  # |sx - sy| / max(sx, sy)
SHEAR_TERM_LIMIT = 0.1     # |b + c|

# Merge tolerance recommendation (pixels)
MIN_TOLERANCE_PX = 5
TOLERANCE_RMSE_FACTOR = 2.5
DEFAULT_RMSE_PX = 5.0  # used when no fit has been calculated yet

# Logging
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"
