"""
HoverAnalyzer - Main Package
============================

Multirotor hover current and flight-time estimation from motor
thrust-test data.

This package provides:
- Hover Analyzer (hover_analyzer): lift interpolation, below-range
  extrapolation, weight vs flight-time curves, current limits and
  motor catalog reading
"""

__version__ = "0.1.0"
__author__ = "HoverAnalyzer Team"
