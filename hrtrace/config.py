"""Numerical defaults shared across the package."""

# Tolerances of the embedded error estimate
DEFAULT_ATOL = 1e-4
DEFAULT_RTOL = 1e-4

# Maximum spacing of output samples
DEFAULT_MAX_GAP = 0.1

# Step-size controller
SAFETY = 0.9
MAX_SHRINK = 0.2
MAX_GROW = 5.0
DECREASE_THRESHOLD = 1.1
INCREASE_THRESHOLD = 0.5

# Smallest step the stepper will retry with before giving up
MIN_STEP = 1e-15
