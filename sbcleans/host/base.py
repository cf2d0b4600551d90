"""
sbcleans.host.base - Abstract storyboard project service.

Every pipeline step talks to the storyboard host through this interface.
Export parameters are passed as explicit structs rather than host
preference keys.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class MovieExportParams:
    """Parameters for one movie export pass."""

    path: Path
    pattern: str
    format: str = "mov"
    width: int = 1920
    height: int = 1080
    clip_per: str = "scene"

    def __post_init__(self) -> None:
        if self.clip_per not in ("scene", "project"):
            raise ValueError(f"clip_per must be 'scene' or 'project', got '{self.clip_per}'")


@dataclass(frozen=True)
class ConformationExportParams:
    """Parameters for the bulk conformation export (panel images + editorial XML)."""

    path: Path
    pattern: str
    bitmap_format: str = "png"
    target_format: int = 0  # 0 is Final Cut Pro XML


class ProjectModel(ABC):
    """Stateful storyboard project owned by the host.

    Ids are opaque strings handed out by the host; indexes are 0-based
    positions in project or scene order.
    """

    # Project

    @abstractmethod
    def frame_rate(self) -> float:
        """Return the project frame rate."""

    @abstractmethod
    def set_frame_rate(self, fps: float) -> None:
        """Set the project frame rate."""

    @abstractmethod
    def unlock_names(self) -> None:
        """Allow custom scene and panel names."""

    # Sequences

    @abstractmethod
    def sequence_count(self) -> int:
        """Number of sequences in the project."""

    @abstractmethod
    def sequence_in_project(self, index: int) -> str:
        """Id of the sequence at a project index."""

    @abstractmethod
    def sequence_name(self, sequence_id: str) -> str:
        """Display name of a sequence."""

    @abstractmethod
    def rename_sequence(self, sequence_id: str, name: str) -> None:
        """Rename a sequence."""

    @abstractmethod
    def merge_all_sequences(self) -> None:
        """Join every act, then every sequence, into a single sequence."""

    @abstractmethod
    def create_sequence_from_panels(self, panel_ids: list[str]) -> str:
        """Create a sequence containing the given panels and return its id."""

    # Scenes and panels

    @abstractmethod
    def scene_count(self) -> int:
        """Number of scenes in the project."""

    @abstractmethod
    def scene_in_project(self, index: int) -> str:
        """Id of the scene at a project index."""

    @abstractmethod
    def scene_name(self, scene_id: str) -> str:
        """Display name of a scene."""

    @abstractmethod
    def rename_scene(self, scene_id: str, name: str) -> None:
        """Rename a scene."""

    @abstractmethod
    def panels_in_scene(self, scene_id: str) -> list[str]:
        """Panel ids of a scene, in scene order."""

    @abstractmethod
    def panels_in_project(self) -> list[str]:
        """Panel ids of the whole project, in project order."""

    @abstractmethod
    def rename_panel(self, panel_id: str, name: str) -> None:
        """Rename a panel."""

    @abstractmethod
    def scene_of_panel(self, panel_id: str) -> str:
        """Id of the scene owning a panel."""

    # Layers and motion

    @abstractmethod
    def layer_count(self, panel_id: str) -> int:
        """Number of layers in a panel."""

    @abstractmethod
    def linked_layer_function(self, panel_id: str, layer_index: int, attribute: str) -> str:
        """Id of the function curve driving a layer attribute ("" if none)."""

    @abstractmethod
    def function_point_count(self, panel_id: str, function_id: str) -> int:
        """Number of keyframes on a function curve (0 for an empty id)."""

    # Export

    @abstractmethod
    def export_movie(self, params: MovieExportParams) -> list[Path]:
        """Run one movie export pass and return the files written."""

    @abstractmethod
    def export_conformation(self, params: ConformationExportParams) -> list[Path]:
        """Run the bulk conformation export and return the files written."""
