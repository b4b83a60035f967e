"""
Split Analysis

Parsing and analysis of WinSplits Online split-time exports.
"""

__version__ = "1.5.1"
