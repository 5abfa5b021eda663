"""
Detection calibration constants.

These values encode one specific detection calibration (smoothing depth,
shape tolerance and decision levels). They are not tuning knobs.
"""

import numpy as np

# Region finder smoothing
SMOOTHING_ROUNDS = 5
SMOOTHING_WINDOW = 7
SHRINK_PER_ROUND = SMOOTHING_WINDOW - 1
REGION_OFFSET = SMOOTHING_ROUNDS * 3  # scan index -> channel

# Second difference drops 2 channels, each round drops SHRINK_PER_ROUND, and
# the boundary scan needs two values to compare.
MIN_BINS = 2 + SMOOTHING_ROUNDS * SHRINK_PER_ROUND + 2

# Undisturbed photopeaks have FWTM/FWHM at or below this
SHAPE_RATIO_LIMIT = 1.9

# Verdict levels
INTEGRITY_DECISION = 0.95
CONFIDENCE_DECISION = 0.95

FLOAT_EPS = float(np.finfo(float).eps)
