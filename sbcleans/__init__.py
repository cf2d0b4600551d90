"""
sbcleans - Storyboard cleans export automation.

Prepares a storyboard project for a cleans delivery through a linear pipeline:
filename parsing → frame rate and sequence normalization → scene/panel
renumbering → movie and conformation export → dated folder organization →
motion layer report.
"""

__version__ = "0.1.0"
