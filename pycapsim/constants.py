# pycapsim/constants.py

"""
Constants shared by the capacity pipeline.

This module defines the tolerance bands used by the elasticity models and the
engine, the calendar sizes of the periodic skew tables, and the precision that
capacities are truncated to.
"""

# Rate ratios within this band of 1.0 count as parity (no price response)
PARITY_BAND = 0.01

# One percent step used to express a rate ratio as percent change
PERCENT_STEP = 0.01

# Capacities closer than this to zero skip the tariff elasticity step
NEAR_ZERO_CAPACITY = 0.01

# Number of decimal digits kept by truncation
CAPACITY_DIGITS = 2

# Periodic skew table sizes
DAYS_PER_WEEK = 7
HOURS_PER_DAY = 24

# Index of the sentinel entry seeded into every capacity history
SENTINEL_STEP = 0
