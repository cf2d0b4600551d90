"""
sbcleans.normalize - Project structure normalization before export.

Brings the project to the shape the cleans delivery expects: a fixed frame
rate, exactly one sequence named after the export filename, and scenes and
panels numbered 1..n in project order.
"""

from __future__ import annotations

from enum import Enum

from sbcleans.host.base import ProjectModel
from sbcleans.logging import logger


class SequenceChange(str, Enum):
    """Structural change made by check_sequence."""

    NONE = "none"
    MERGED = "merged"
    CREATED = "created"


def check_frame_rate(model: ProjectModel, target: float = 23.976) -> bool:
    """Force the project frame rate to the target.

    The current rate is compared after rounding to 3 decimals, so
    23.976024 counts as 23.976.

    Returns:
        True if the frame rate was changed
    """
    current = round(model.frame_rate(), 3)
    if current == round(target, 3):
        return False
    model.set_frame_rate(target)
    logger.info(f"Frame rate changed from {current} to {target}")
    return True


def check_sequence(model: ProjectModel, sequence_name: str) -> tuple[SequenceChange, bool]:
    """Converge the project to a single sequence named sequence_name.

    Args:
        model: Storyboard project
        sequence_name: Parsed sequence id, e.g. "010"

    Returns:
        (structural change, whether the sequence was renamed)
    """
    count = model.sequence_count()
    change = SequenceChange.NONE

    if count > 1:
        model.merge_all_sequences()
        change = SequenceChange.MERGED
        logger.debug(f"{count} sequences detected. Merged all acts and sequences.")
    elif count < 1:
        model.create_sequence_from_panels(model.panels_in_project())
        change = SequenceChange.CREATED
        logger.debug("No sequences detected. Created a new sequence.")

    sequence_id = model.sequence_in_project(0)
    renamed = False
    if model.sequence_name(sequence_id) != sequence_name:
        model.rename_sequence(sequence_id, sequence_name)
        renamed = True
        logger.debug(f"Incorrect sequence name detected. Renamed sequence to {sequence_name}.")

    return change, renamed


def rename_scenes_and_panels(model: ProjectModel) -> int:
    """Rename scenes 1..n in project order and panels 1..m within each scene.

    Returns:
        Number of scenes renamed
    """
    model.unlock_names()

    scene_count = model.scene_count()
    for i in range(scene_count):
        scene_id = model.scene_in_project(i)
        model.rename_scene(scene_id, str(i + 1))
        for j, panel_id in enumerate(model.panels_in_scene(scene_id)):
            model.rename_panel(panel_id, str(j + 1))

    return scene_count
