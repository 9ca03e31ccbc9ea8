"""
Backends for permutation FDR curves.

Each backend handles one target kind.
"""

from pypropr.fdr.backends.cpu import CPUPairwiseFdrBackend, CPUGroupDifferenceFdrBackend

__all__ = [
    "CPUPairwiseFdrBackend",
    "CPUGroupDifferenceFdrBackend",
]
