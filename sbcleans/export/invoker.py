"""
sbcleans.export.invoker - Export pass sequencing.

Builds the explicit parameter structs for each export pass and hands them
to the storyboard host.
"""

from __future__ import annotations

from pathlib import Path

from sbcleans.config import CleansConfig
from sbcleans.exceptions import ExportError, HostError
from sbcleans.host.base import ConformationExportParams, MovieExportParams, ProjectModel
from sbcleans.logging import logger
from sbcleans.naming import movie_pattern, panel_pattern


def movie_passes(
    cleans_path: Path,
    movies_path: Path,
    base_name: str,
    version: str,
    config: CleansConfig,
) -> list[MovieExportParams]:
    """Per-scene clips into the movies folder, then the whole project into the cleans root."""
    common = {
        "format": config.movie_format,
        "width": config.resolution.width,
        "height": config.resolution.height,
    }
    return [
        MovieExportParams(
            path=movies_path, pattern=movie_pattern(version), clip_per="scene", **common
        ),
        MovieExportParams(path=cleans_path, pattern=base_name, clip_per="project", **common),
    ]


def conformation_params(
    cleans_path: Path,
    base_name: str,
    version: str,
    config: CleansConfig,
) -> ConformationExportParams:
    return ConformationExportParams(
        path=cleans_path / base_name,
        pattern=panel_pattern(version),
        bitmap_format=config.bitmap_format,
        target_format=config.target_format,
    )


def export_movies(
    model: ProjectModel,
    cleans_path: Path,
    movies_path: Path,
    base_name: str,
    version: str,
    config: CleansConfig,
) -> list[Path]:
    """Run both movie export passes.

    Raises:
        ExportError: If the host fails either pass
    """
    written: list[Path] = []
    for params in movie_passes(cleans_path, movies_path, base_name, version, config):
        logger.debug(f"Exporting {params.clip_per} movie(s) as {params.pattern} to {params.path}")
        try:
            written.extend(model.export_movie(params))
        except (HostError, OSError) as e:
            raise ExportError(f"Movie export failed: {e}") from e
    return written


def export_conformation(
    model: ProjectModel,
    cleans_path: Path,
    base_name: str,
    version: str,
    config: CleansConfig,
) -> list[Path]:
    """Run the conformation export into the cleans root.

    Raises:
        ExportError: If the host fails the export
    """
    params = conformation_params(cleans_path, base_name, version, config)
    logger.debug(f"Conformation export as {params.pattern} to {params.path}")
    try:
        return model.export_conformation(params)
    except (HostError, OSError) as e:
        raise ExportError(f"Conformation export failed: {e}") from e
