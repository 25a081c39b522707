"""
Analysis of recorded traces.

- Toggle activity: how often each signal changes
- Trace comparison: first cycle where two runs diverge
"""

from rtlsim.analysis.activity import toggle_counts, toggle_rates, first_divergence

__all__ = [
    "toggle_counts",
    "toggle_rates",
    "first_divergence",
]
