"""
sbcleans.export.fcpxml - FCPXML 1.11 generator for conformed panels.

Writes the editorial XML half of a conformation export: one still-image
asset per panel, laid end to end on a single spine in project order.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from xml.sax.saxutils import quoteattr

# nominal rate -> (frame duration numerator, timebase, format name suffix)
TIMEBASES: dict[float, tuple[int, int, str]] = {
    23.976: (1001, 24000, "2398"),
    24.0: (100, 2400, "24"),
    25.0: (100, 2500, "25"),
    29.97: (1001, 30000, "2997"),
}


@dataclass(frozen=True)
class ConformedClip:
    """A panel image placed on the conformed timeline."""

    name: str
    path: Path
    duration_frames: int
    scene: str = ""


def timebase(fps: float) -> tuple[int, int, str]:
    """Rational frame duration for a project frame rate.

    Rates outside TIMEBASES get a 1/100 s based timebase.
    """
    for nominal, entry in TIMEBASES.items():
        if abs(fps - nominal) < 0.01:
            return entry
    return 100, int(fps * 100), str(int(fps))


def frames_to_fcpxml_time(frame_count: int, fps: float) -> str:
    """Convert a frame count to FCPXML rational time, e.g. "24024/24000s"."""
    numerator, denominator, _ = timebase(fps)
    return f"{frame_count * numerator}/{denominator}s"


def format_attributes(fps: float, width: int = 1920, height: int = 1080) -> dict[str, str]:
    """Attributes of the single <format> resource shared by every clip."""
    numerator, denominator, suffix = timebase(fps)
    return {
        "id": "r1",
        "name": f"FFVideoFormat{height}p{suffix}",
        "frameDuration": f"{numerator}/{denominator}s",
        "width": str(width),
        "height": str(height),
    }


def generate_conformation_xml(
    project_name: str,
    clips: list[ConformedClip],
    fps: float,
    width: int = 1920,
    height: int = 1080,
) -> str:
    """Generate FCPXML 1.11 for a list of conformed panel images.

    Args:
        project_name: Name of the FCP project (export base name)
        clips: Panel images in timeline order
        fps: Project frame rate
        width: Frame width
        height: Frame height

    Returns:
        FCPXML content as string
    """
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        "<!DOCTYPE fcpxml>",
        '<fcpxml version="1.11">',
        "    <resources>",
    ]

    format_attrs = format_attributes(fps, width, height)
    format_line = "        <format"
    for key, value in format_attrs.items():
        format_line += f" {key}={quoteattr(value)}"
    format_line += "/>"
    lines.append(format_line)

    for i, clip in enumerate(clips, 1):
        lines.append(
            f'        <asset id="a{i}" name={quoteattr(clip.path.stem)} '
            f"src={quoteattr(clip.path.resolve().as_uri())} "
            f'start="0s" duration="0s" hasVideo="1" format="r1"/>'
        )

    total_frames = sum(c.duration_frames for c in clips)

    lines.extend(
        [
            "    </resources>",
            "    <library>",
            '        <event name="Cleans">',
            f"            <project name={quoteattr(project_name)}>",
            '                <sequence format="r1" tcStart="0s" tcFormat="NDF" '
            f'duration="{frames_to_fcpxml_time(total_frames, fps)}">',
            "                    <spine>",
        ]
    )

    offset = 0
    for i, clip in enumerate(clips, 1):
        lines.append(
            f"                        <video name={quoteattr(clip.name)} "
            f'ref="a{i}" '
            f'offset="{frames_to_fcpxml_time(offset, fps)}" '
            f'start="0s" '
            f'duration="{frames_to_fcpxml_time(clip.duration_frames, fps)}">'
        )
        if clip.scene:
            lines.append(
                f'                            <marker start="0s" duration="0s" '
                f"value={quoteattr('Scene ' + clip.scene)}/>"
            )
        lines.append("                        </video>")
        offset += clip.duration_frames

    lines.extend(
        [
            "                    </spine>",
            "                </sequence>",
            "            </project>",
            "        </event>",
            "    </library>",
            "</fcpxml>",
        ]
    )

    return "\n".join(lines)
