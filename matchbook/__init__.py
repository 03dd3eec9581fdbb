"""
Matchbook: tennis match journal analytics.

Turns a list of logged matches into derived statistics, trend series,
letter grades, achievements and natural-language insights.
"""

__version__ = "0.1.0"
