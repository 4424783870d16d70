"""
Universal Plotting Sheet

This package provides tools for plotting celestial lines of position
on a digital universal plotting sheet. It parses the sight reduction
values a navigator enters, draws each line on a latitude/longitude grid
and finds where the lines cross.
"""

__version__ = "0.2.0"
