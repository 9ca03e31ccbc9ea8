"""
Computational utilities shared across pypropr.

    timing: section Timer for Result.timing
    quantile: R type-7 sample quantiles
"""

from pypropr.core.compute.timing import Timer
from pypropr.core.compute.quantile import r_quantile_type7

__all__ = [
    "Timer",
    "r_quantile_type7",
]
