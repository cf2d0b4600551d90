"""
sbcleans.export - Movie and conformation export.

Drives the storyboard host's export passes:
- per-scene movies and one whole-project movie
- conformation export (panel images + Final Cut Pro XML)
"""

from __future__ import annotations
