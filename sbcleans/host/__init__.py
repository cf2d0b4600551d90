"""
sbcleans.host - Storyboard host service interface.

ProjectModel is the seam between the export pipeline and the storyboard
application. StoryboardDocument implements it over a YAML project file.
"""

from __future__ import annotations

from sbcleans.host.base import ConformationExportParams, MovieExportParams, ProjectModel
from sbcleans.host.document import StoryboardDocument

__all__ = [
    "ConformationExportParams",
    "MovieExportParams",
    "ProjectModel",
    "StoryboardDocument",
]
