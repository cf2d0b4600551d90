"""
sbcleans.motion - Motion layer detection.

Flags scenes whose layers carry an animated skew curve (more than one
keyframe) so they can be checked before the cleans go out.
"""

from __future__ import annotations

from pathlib import Path

from sbcleans.host.base import ProjectModel
from sbcleans.io import write_text
from sbcleans.logging import logger

REPORT_NAME = "_MotionLayers.txt"
REPORT_HEADER = "SCENES WITH MOTION LAYERS: "


def detect_motion_layer_scenes(model: ProjectModel, attribute: str = "skew") -> list[str]:
    """List the scene name of every layer with a multi-keyframe curve.

    Panels are walked in project order. A scene appears once per qualifying
    layer, so duplicates are expected.
    """
    scenes = []
    for panel_id in model.panels_in_project():
        for layer in range(model.layer_count(panel_id)):
            function_id = model.linked_layer_function(panel_id, layer, attribute)
            points = model.function_point_count(panel_id, function_id)
            logger.debug(f"panel {panel_id} layer {layer}: {points} {attribute} point(s)")
            if points > 1:
                scenes.append(model.scene_name(model.scene_of_panel(panel_id)))
    return scenes


def format_motion_report(scenes: list[str], header: str = REPORT_HEADER) -> str:
    return "\n".join([header, *scenes]) + "\n"


def write_motion_report(
    cleans_path: Path,
    scenes: list[str],
    name: str = REPORT_NAME,
    header: str = REPORT_HEADER,
) -> Path | None:
    """Write the motion layer report if any scene was flagged.

    Returns:
        Path of the report, or None when nothing was written
    """
    if not scenes:
        return None
    report_path = cleans_path / name
    write_text(report_path, format_motion_report(scenes, header))
    logger.info(f"{len(scenes)} motion layer(s) reported in {report_path}")
    return report_path
