"""
sbcleans.host.document - Offline storyboard document backed by YAML.

Implements ProjectModel over a plain project description so the export
pipeline can run without the storyboard application:

    name: Show_SQ010
    frame_rate: 24
    names_locked: true
    audio: [audio/temp_mix.wav]
    sequences:
      - name: "010"
        scenes:
          - name: A
            panels:
              - name: "1"
                image: panels/a1.png
                duration_frames: 36
                layers:
                  - name: BG
                    skew: [0, 12]

Top-level ``scenes`` hold scenes outside any sequence. Relative ``image`` and
``audio`` paths resolve against the document's directory. Movie encoding is
not available offline.
"""

from __future__ import annotations

import itertools
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from sbcleans.exceptions import HostError
from sbcleans.export.fcpxml import ConformedClip, generate_conformation_xml
from sbcleans.host.base import ConformationExportParams, MovieExportParams, ProjectModel
from sbcleans.io import read_yaml, write_yaml
from sbcleans.logging import logger
from sbcleans.naming import expand_pattern

DEFAULT_PANEL_FRAMES = 24


@dataclass
class Layer:
    name: str
    functions: dict[str, list[float]] = field(default_factory=dict)


@dataclass
class Panel:
    id: str
    name: str
    image: Path | None = None
    duration_frames: int = DEFAULT_PANEL_FRAMES
    layers: list[Layer] = field(default_factory=list)


@dataclass
class Scene:
    id: str
    name: str
    sequence_id: str | None = None
    panels: list[Panel] = field(default_factory=list)


@dataclass
class Sequence:
    id: str
    name: str


class StoryboardDocument(ProjectModel):
    """In-memory storyboard project loaded from, and saved to, YAML."""

    def __init__(
        self,
        name: str = "Untitled",
        frame_rate: float = 24.0,
        base_dir: Path | None = None,
        names_locked: bool = True,
    ) -> None:
        self.name = name
        self._frame_rate = frame_rate
        self.base_dir = base_dir or Path.cwd()
        self.names_locked = names_locked
        self.audio: list[Path] = []
        self.sequences: list[Sequence] = []
        self.scenes: list[Scene] = []
        self._ids = itertools.count(1)

    # Construction

    def _next_id(self, kind: str) -> str:
        return f"{kind}-{next(self._ids)}"

    def add_sequence(self, name: str) -> Sequence:
        sequence = Sequence(id=self._next_id("seq"), name=name)
        self.sequences.append(sequence)
        return sequence

    def add_scene(self, name: str, sequence: Sequence | None = None) -> Scene:
        scene = Scene(
            id=self._next_id("sc"),
            name=name,
            sequence_id=sequence.id if sequence else None,
        )
        self.scenes.append(scene)
        return scene

    def add_panel(
        self,
        scene: Scene,
        name: str,
        image: Path | None = None,
        duration_frames: int = DEFAULT_PANEL_FRAMES,
        layers: list[Layer] | None = None,
    ) -> Panel:
        panel = Panel(
            id=self._next_id("pn"),
            name=name,
            image=image,
            duration_frames=duration_frames,
            layers=layers or [],
        )
        scene.panels.append(panel)
        return panel

    @classmethod
    def load(cls, path: Path) -> StoryboardDocument:
        """Load a document from a YAML project description.

        Raises:
            HostError: If the file is missing or malformed
        """
        if not path.exists():
            raise HostError(f"Storyboard document not found: {path}")
        try:
            data = read_yaml(path)
        except Exception as e:
            raise HostError(f"Cannot read storyboard document {path}: {e}") from e
        if not isinstance(data, dict):
            raise HostError(f"Storyboard document must be a mapping: {path}")
        return cls.from_dict(data, base_dir=path.parent)

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path | None = None) -> StoryboardDocument:
        doc = cls(
            name=str(data.get("name", "Untitled")),
            frame_rate=float(data.get("frame_rate", 24.0)),
            base_dir=base_dir,
            names_locked=bool(data.get("names_locked", True)),
        )
        doc.audio = [Path(p) for p in data.get("audio", [])]

        for seq_data in data.get("sequences", []):
            sequence = doc.add_sequence(str(seq_data.get("name", "")))
            for scene_data in seq_data.get("scenes", []):
                doc._load_scene(scene_data, sequence)

        for scene_data in data.get("scenes", []):
            doc._load_scene(scene_data, None)

        return doc

    def _load_scene(self, scene_data: dict[str, Any], sequence: Sequence | None) -> None:
        scene = self.add_scene(str(scene_data.get("name", "")), sequence)
        for panel_data in scene_data.get("panels", []):
            layers = []
            for layer_data in panel_data.get("layers", []):
                functions = {
                    key: [float(v) for v in value]
                    for key, value in layer_data.items()
                    if key != "name" and isinstance(value, list)
                }
                layers.append(Layer(name=str(layer_data.get("name", "")), functions=functions))
            image = panel_data.get("image")
            self.add_panel(
                scene,
                str(panel_data.get("name", "")),
                image=Path(image) if image else None,
                duration_frames=int(panel_data.get("duration_frames", DEFAULT_PANEL_FRAMES)),
                layers=layers,
            )

    def to_dict(self) -> dict[str, Any]:
        def scene_dict(scene: Scene) -> dict[str, Any]:
            return {
                "name": scene.name,
                "panels": [
                    {
                        "name": panel.name,
                        **({"image": str(panel.image)} if panel.image else {}),
                        "duration_frames": panel.duration_frames,
                        "layers": [
                            {"name": layer.name, **layer.functions} for layer in panel.layers
                        ],
                    }
                    for panel in scene.panels
                ],
            }

        data: dict[str, Any] = {
            "name": self.name,
            "frame_rate": self._frame_rate,
            "names_locked": self.names_locked,
        }
        if self.audio:
            data["audio"] = [str(p) for p in self.audio]
        data["sequences"] = [
            {
                "name": sequence.name,
                "scenes": [
                    scene_dict(s) for s in self.scenes if s.sequence_id == sequence.id
                ],
            }
            for sequence in self.sequences
        ]
        loose = [scene_dict(s) for s in self.scenes if s.sequence_id is None]
        if loose:
            data["scenes"] = loose
        return data

    def save(self, path: Path) -> None:
        """Write the current project structure back to YAML."""
        write_yaml(path, self.to_dict())

    # Lookups

    def _scene(self, scene_id: str) -> Scene:
        for scene in self.scenes:
            if scene.id == scene_id:
                return scene
        raise HostError(f"Unknown scene id: {scene_id}")

    def _sequence(self, sequence_id: str) -> Sequence:
        for sequence in self.sequences:
            if sequence.id == sequence_id:
                return sequence
        raise HostError(f"Unknown sequence id: {sequence_id}")

    def _panel(self, panel_id: str) -> tuple[Scene, Panel]:
        for scene in self.scenes:
            for panel in scene.panels:
                if panel.id == panel_id:
                    return scene, panel
        raise HostError(f"Unknown panel id: {panel_id}")

    def _resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else self.base_dir / path

    # ProjectModel

    def frame_rate(self) -> float:
        return self._frame_rate

    def set_frame_rate(self, fps: float) -> None:
        self._frame_rate = fps

    def unlock_names(self) -> None:
        self.names_locked = False

    def sequence_count(self) -> int:
        return len(self.sequences)

    def sequence_in_project(self, index: int) -> str:
        try:
            return self.sequences[index].id
        except IndexError:
            raise HostError(f"No sequence at index {index}") from None

    def sequence_name(self, sequence_id: str) -> str:
        return self._sequence(sequence_id).name

    def rename_sequence(self, sequence_id: str, name: str) -> None:
        self._sequence(sequence_id).name = name

    def merge_all_sequences(self) -> None:
        if not self.sequences:
            return
        keep = self.sequences[0]
        for scene in self.scenes:
            scene.sequence_id = keep.id
        self.sequences = [keep]

    def create_sequence_from_panels(self, panel_ids: list[str]) -> str:
        sequence = self.add_sequence(str(len(self.sequences) + 1))
        wanted = set(panel_ids)
        for scene in self.scenes:
            if any(panel.id in wanted for panel in scene.panels):
                scene.sequence_id = sequence.id
        return sequence.id

    def scene_count(self) -> int:
        return len(self.scenes)

    def scene_in_project(self, index: int) -> str:
        try:
            return self.scenes[index].id
        except IndexError:
            raise HostError(f"No scene at index {index}") from None

    def scene_name(self, scene_id: str) -> str:
        return self._scene(scene_id).name

    def rename_scene(self, scene_id: str, name: str) -> None:
        if self.names_locked:
            raise HostError("Scene names are locked")
        self._scene(scene_id).name = name

    def panels_in_scene(self, scene_id: str) -> list[str]:
        return [panel.id for panel in self._scene(scene_id).panels]

    def panels_in_project(self) -> list[str]:
        return [panel.id for scene in self.scenes for panel in scene.panels]

    def rename_panel(self, panel_id: str, name: str) -> None:
        if self.names_locked:
            raise HostError("Panel names are locked")
        self._panel(panel_id)[1].name = name

    def scene_of_panel(self, panel_id: str) -> str:
        return self._panel(panel_id)[0].id

    def layer_count(self, panel_id: str) -> int:
        return len(self._panel(panel_id)[1].layers)

    def linked_layer_function(self, panel_id: str, layer_index: int, attribute: str) -> str:
        layers = self._panel(panel_id)[1].layers
        if not 0 <= layer_index < len(layers):
            raise HostError(f"No layer {layer_index} in panel {panel_id}")
        if attribute not in layers[layer_index].functions:
            return ""
        return f"{panel_id}/{layer_index}/{attribute}"

    def function_point_count(self, panel_id: str, function_id: str) -> int:
        if not function_id:
            return 0
        owner, layer_index, attribute = function_id.split("/")
        if owner != panel_id:
            raise HostError(f"Function {function_id} does not belong to panel {panel_id}")
        layer = self._panel(panel_id)[1].layers[int(layer_index)]
        return len(layer.functions.get(attribute, []))

    def export_movie(self, params: MovieExportParams) -> list[Path]:
        raise HostError(
            f"Cannot export {params.clip_per} movies to {params.path}: "
            "movie encoding requires the storyboard application"
        )

    def export_conformation(self, params: ConformationExportParams) -> list[Path]:
        """Copy panel images under the export pattern and write the editorial XML.

        Files land beside ``params.path``; the XML is named after its last
        component.
        """
        if params.target_format != 0:
            raise HostError(f"Unsupported conformation target format: {params.target_format}")

        out_dir = params.path.parent
        out_dir.mkdir(parents=True, exist_ok=True)
        sequence_names = {s.id: s.name for s in self.sequences}
        written: list[Path] = []
        clips: list[ConformedClip] = []

        for scene in self.scenes:
            sequence_name = sequence_names.get(scene.sequence_id or "", "")
            for panel in scene.panels:
                stem = expand_pattern(params.pattern, sequence_name, scene.name, panel.name)
                target = out_dir / f"{stem}.{params.bitmap_format}"
                if panel.image is None:
                    logger.debug(f"Panel {panel.id} has no image; not written")
                else:
                    source = self._resolve(panel.image)
                    if source.suffix.lower().lstrip(".") != params.bitmap_format:
                        raise HostError(
                            f"Panel image {source.name} is not {params.bitmap_format}; "
                            "image conversion requires the storyboard application"
                        )
                    shutil.copy2(source, target)
                    written.append(target)
                clips.append(
                    ConformedClip(
                        name=stem,
                        path=target,
                        duration_frames=panel.duration_frames,
                        scene=scene.name,
                    )
                )

        for audio in self.audio:
            source = self._resolve(audio)
            target = out_dir / source.name
            shutil.copy2(source, target)
            written.append(target)

        xml_path = out_dir / f"{params.path.name}.xml"
        xml_path.write_text(
            generate_conformation_xml(params.path.name, clips, self._frame_rate),
            encoding="utf-8",
        )
        written.append(xml_path)
        logger.debug(f"Conformation export wrote {len(written)} file(s) to {out_dir}")
        return written
