"""
sbcleans.folders - Dated export folder tree and file sorting.

Each run gets a fresh <MMDDYY>_CLEANS folder (suffixed _02, _03, ... when
one already exists for the day) with subfolders for scene movies, panel
images and audio.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from sbcleans.config import Subfolders
from sbcleans.logging import logger
from sbcleans.utils import date_stamp, pad_number

AUDIO_EXTENSIONS = (".wav", ".aif", ".aiff", ".mp3")


@dataclass(frozen=True)
class ExportDirectories:
    """Folders created for one cleans export."""

    cleans: Path
    movies: Path
    panels: Path
    audio: Path


@dataclass
class OrganizeResult:
    """Files relocated by organize_files."""

    panels: list[Path] = field(default_factory=list)
    audio: list[Path] = field(default_factory=list)


def next_folder_name(export_path: Path, stamp: str, suffix: str = "_CLEANS") -> str:
    """Return the first unused <stamp><suffix>[_NN] folder name in export_path."""
    base = f"{stamp}{suffix}"
    name = base
    version = 2
    while (export_path / name).exists():
        name = f"{base}_{pad_number(version)}"
        version += 1
    return name


def create_directories(
    export_path: Path,
    today: date | None = None,
    suffix: str = "_CLEANS",
    subfolders: Subfolders | None = None,
) -> ExportDirectories:
    """Create the dated cleans folder and its subfolders.

    Args:
        export_path: Directory chosen by the user
        today: Date used for the folder stamp (default: today)
        suffix: Text appended to the date stamp
        subfolders: Subfolder names (default: Scene Quicktimes, Panels, Audio)

    Returns:
        ExportDirectories with all four paths
    """
    subfolders = subfolders or Subfolders()
    name = next_folder_name(export_path, date_stamp(today), suffix)

    cleans = export_path / name
    cleans.mkdir(parents=True)
    dirs = ExportDirectories(
        cleans=cleans,
        movies=cleans / subfolders.movies,
        panels=cleans / subfolders.panels,
        audio=cleans / subfolders.audio,
    )
    for sub in (dirs.movies, dirs.panels, dirs.audio):
        sub.mkdir()

    logger.debug(f"Created export folder {cleans}")
    return dirs


def _move_all(files: list[Path], destination: Path) -> list[Path]:
    moved = []
    for f in files:
        target = destination / f.name
        shutil.move(str(f), str(target))
        moved.append(target)
    return moved


def organize_files(
    dirs: ExportDirectories,
    image_format: str = "png",
    audio_extensions: tuple[str, ...] | list[str] = AUDIO_EXTENSIONS,
) -> OrganizeResult:
    """Move exported images and audio from the cleans root into their folders.

    Only files directly in the cleans root are considered. Anything that is
    neither an image of image_format nor audio stays where it is.
    """
    image_suffix = f".{image_format.lower()}"
    audio_suffixes = {ext.lower() for ext in audio_extensions}

    entries = sorted(p for p in dirs.cleans.iterdir() if p.is_file())
    images = [p for p in entries if p.suffix.lower() == image_suffix]
    audio = [p for p in entries if p.suffix.lower() in audio_suffixes]

    result = OrganizeResult()
    result.panels = _move_all(images, dirs.panels)
    logger.debug(f"Moved {len(result.panels)} panel image(s) to {dirs.panels}")

    if not audio:
        return result

    result.audio = _move_all(audio, dirs.audio)
    logger.debug(f"Moved {len(result.audio)} audio file(s) to {dirs.audio}")
    return result
