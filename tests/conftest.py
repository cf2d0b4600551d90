"""
Test configuration and shared fixtures.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from sbcleans.host.base import MovieExportParams
from sbcleans.host.document import StoryboardDocument
from sbcleans.naming import expand_pattern


class RecordingDocument(StoryboardDocument):
    """StoryboardDocument that fakes movie encoding by writing empty clips."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.movie_calls: list[MovieExportParams] = []

    def export_movie(self, params: MovieExportParams) -> list[Path]:
        self.movie_calls.append(params)
        params.path.mkdir(parents=True, exist_ok=True)
        sequence_names = {s.id: s.name for s in self.sequences}
        if params.clip_per == "project":
            stems = [params.pattern]
        else:
            stems = [
                expand_pattern(params.pattern, sequence_names.get(s.sequence_id or "", ""), s.name)
                for s in self.scenes
            ]
        written = []
        for stem in stems:
            path = params.path / f"{stem}.{params.format}"
            path.write_bytes(b"")
            written.append(path)
        return written


@pytest.fixture
def sample_document_dict() -> dict:
    """Two sequences, two scenes, three panels; scene B has two animated layers."""
    return {
        "name": "Show",
        "frame_rate": 24,
        "audio": ["audio/temp_mix.wav"],
        "sequences": [
            {
                "name": "SQ1",
                "scenes": [
                    {
                        "name": "A",
                        "panels": [
                            {
                                "name": "1",
                                "image": "panels/a1.png",
                                "layers": [
                                    {"name": "BG", "skew": [0, 12]},
                                    {"name": "FG", "skew": [0]},
                                ],
                            },
                            {
                                "name": "3",
                                "image": "panels/a3.png",
                                "layers": [{"name": "BG"}],
                            },
                        ],
                    }
                ],
            },
            {
                "name": "SQ2",
                "scenes": [
                    {
                        "name": "B",
                        "panels": [
                            {
                                "name": "1",
                                "image": "panels/b1.png",
                                "duration_frames": 48,
                                "layers": [
                                    {"name": "BG", "skew": [0, 6, 12]},
                                    {"name": "FX", "skew": [1, 2]},
                                ],
                            }
                        ],
                    }
                ],
            },
        ],
    }


@pytest.fixture
def document_path(tmp_path: Path, sample_document_dict: dict) -> Path:
    """Write the sample document with its panel images and audio to disk."""
    doc_dir = tmp_path / "storyboard"
    (doc_dir / "panels").mkdir(parents=True)
    (doc_dir / "audio").mkdir()
    for name in ("a1.png", "a3.png", "b1.png"):
        (doc_dir / "panels" / name).write_bytes(b"\x89PNG fake")
    (doc_dir / "audio" / "temp_mix.wav").write_bytes(b"RIFF fake")

    path = doc_dir / "project.yaml"
    with open(path, "w") as f:
        yaml.dump(sample_document_dict, f)
    return path


@pytest.fixture
def document(document_path: Path) -> StoryboardDocument:
    return StoryboardDocument.load(document_path)


@pytest.fixture
def recording_document(document_path: Path, sample_document_dict: dict) -> RecordingDocument:
    return RecordingDocument.from_dict(sample_document_dict, base_dir=document_path.parent)


@pytest.fixture
def export_dest(tmp_path: Path) -> Path:
    """Destination file as picked in the save dialog."""
    out = tmp_path / "out"
    out.mkdir()
    return out / "Show_SQ010_Layout_v03.sbpz"
