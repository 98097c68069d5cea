"""
timephase - terminal status bar showing the phase of the current second
"""

__version__ = "0.1.0"
