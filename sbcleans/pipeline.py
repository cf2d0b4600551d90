"""
sbcleans.pipeline - ExportCleans orchestrator.

Runs the cleans export as an ordered list of steps against a ProjectModel:

    validate name → parse name → frame rate → sequence → renumber →
    directories → movies → conformation → organize → motion report

Every step yields a StepResult. The run stops at the first failed step and
leaves the project and filesystem as that step left them; nothing is
rolled back.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from sbcleans.config import CleansConfig
from sbcleans.exceptions import CleansError, FilenameError, PipelineError
from sbcleans.export.invoker import export_conformation, export_movies
from sbcleans.folders import ExportDirectories, create_directories, organize_files
from sbcleans.host.base import ProjectModel
from sbcleans.logging import logger
from sbcleans.motion import detect_motion_layer_scenes, write_motion_report
from sbcleans.naming import ParsedName, parse_file_name, validate_file_name
from sbcleans.normalize import (
    SequenceChange,
    check_frame_rate,
    check_sequence,
    rename_scenes_and_panels,
)
from sbcleans.validation import check_destination


@dataclass
class StepResult:
    """Outcome of one pipeline step."""

    name: str
    ok: bool
    detail: str = ""


@dataclass
class RunResult:
    """Outcome of an ExportCleans run."""

    steps: list[StepResult] = field(default_factory=list)
    aborted: bool = False
    base_name: str = ""
    parsed: ParsedName | None = None
    directories: ExportDirectories | None = None
    motion_scenes: list[str] = field(default_factory=list)
    report_path: Path | None = None

    @property
    def ok(self) -> bool:
        return not self.aborted and all(step.ok for step in self.steps)

    @property
    def failed_step(self) -> StepResult | None:
        return next((step for step in self.steps if not step.ok), None)


class ExportCleans:
    """Cleans export pipeline bound to one storyboard project."""

    def __init__(
        self,
        model: ProjectModel,
        config: CleansConfig | None = None,
        today: date | None = None,
    ) -> None:
        self.model = model
        self.config = config or CleansConfig()
        self.today = today

    def steps(self) -> list[tuple[str, Callable[[RunResult, Path], str]]]:
        return [
            ("validate_name", self._validate_name),
            ("parse_name", self._parse_name),
            ("frame_rate", self._frame_rate),
            ("sequence", self._sequence),
            ("renumber", self._renumber),
            ("directories", self._directories),
            ("movies", self._movies),
            ("conformation", self._conformation),
            ("organize", self._organize),
            ("motion", self._motion),
        ]

    def run(self, destination: Path | str | None) -> RunResult:
        """Run every step for the chosen destination file.

        Args:
            destination: Path picked in the save dialog; its directory is the
                export root and its stem the export base name. An empty value
                aborts without touching the project.

        Returns:
            RunResult; check ``ok`` and ``failed_step``
        """
        result = RunResult()
        if not destination:
            logger.debug("No destination chosen; nothing to do")
            result.aborted = True
            return result

        destination = Path(destination)
        result.base_name = destination.stem

        for name, step in self.steps():
            try:
                detail = step(result, destination)
            except (CleansError, OSError) as e:
                logger.error(f"Step '{name}' failed: {e}")
                result.steps.append(StepResult(name=name, ok=False, detail=str(e)))
                logger.warning(f"Aborting cleans export at step '{name}'")
                break
            logger.debug(f"Step '{name}': {detail}")
            result.steps.append(StepResult(name=name, ok=True, detail=detail))

        return result

    def _require_parsed(self, result: RunResult) -> ParsedName:
        if result.parsed is None:
            raise PipelineError("Export filename has not been parsed")
        return result.parsed

    def _require_directories(self, result: RunResult) -> ExportDirectories:
        if result.directories is None:
            raise PipelineError("Export directories have not been created")
        return result.directories

    def _validate_name(self, result: RunResult, destination: Path) -> str:
        if not validate_file_name(result.base_name, self.config.placeholder_name):
            raise FilenameError("No filename given.")
        return result.base_name

    def _parse_name(self, result: RunResult, destination: Path) -> str:
        result.parsed = parse_file_name(result.base_name, self.config.sequence_prefix)
        logger.debug(f"sequence: {result.parsed.sequence}, version: {result.parsed.version}")
        return f"sequence {result.parsed.sequence}, version {result.parsed.version}"

    def _frame_rate(self, result: RunResult, destination: Path) -> str:
        target = self.config.target_frame_rate
        if check_frame_rate(self.model, target):
            return f"changed to {target}"
        return "unchanged"

    def _sequence(self, result: RunResult, destination: Path) -> str:
        parsed = self._require_parsed(result)
        change, renamed = check_sequence(self.model, parsed.sequence)
        parts = []
        if change is SequenceChange.MERGED:
            parts.append("merged sequences")
        elif change is SequenceChange.CREATED:
            parts.append("created sequence")
        if renamed:
            parts.append(f"renamed to {parsed.sequence}")
        return ", ".join(parts) or "unchanged"

    def _renumber(self, result: RunResult, destination: Path) -> str:
        count = rename_scenes_and_panels(self.model)
        return f"{count} scene(s) renumbered"

    def _directories(self, result: RunResult, destination: Path) -> str:
        export_path = check_destination(destination)
        result.directories = create_directories(
            export_path,
            today=self.today,
            suffix=self.config.folder_suffix,
            subfolders=self.config.subfolders,
        )
        return str(result.directories.cleans)

    def _movies(self, result: RunResult, destination: Path) -> str:
        if not self.config.export_movies:
            return "skipped"
        dirs = self._require_directories(result)
        written = export_movies(
            self.model,
            dirs.cleans,
            dirs.movies,
            result.base_name,
            self._require_parsed(result).version,
            self.config,
        )
        return f"{len(written)} file(s)"

    def _conformation(self, result: RunResult, destination: Path) -> str:
        written = export_conformation(
            self.model,
            self._require_directories(result).cleans,
            result.base_name,
            self._require_parsed(result).version,
            self.config,
        )
        return f"{len(written)} file(s)"

    def _organize(self, result: RunResult, destination: Path) -> str:
        moved = organize_files(
            self._require_directories(result),
            image_format=self.config.bitmap_format,
            audio_extensions=self.config.audio_extensions,
        )
        return f"{len(moved.panels)} panel(s), {len(moved.audio)} audio file(s)"

    def _motion(self, result: RunResult, destination: Path) -> str:
        cleans = self._require_directories(result).cleans
        result.motion_scenes = detect_motion_layer_scenes(self.model)
        result.report_path = write_motion_report(
            cleans,
            result.motion_scenes,
            name=self.config.report_name,
            header=self.config.report_header,
        )
        if result.report_path is None:
            return "no motion layers"
        return f"{len(result.motion_scenes)} motion layer(s)"
