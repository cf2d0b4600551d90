"""Tests for sbcleans.export module."""

from __future__ import annotations

from pathlib import Path

import pytest

from sbcleans.config import CleansConfig
from sbcleans.exceptions import ExportError
from sbcleans.export.fcpxml import (
    ConformedClip,
    frames_to_fcpxml_time,
    generate_conformation_xml,
    format_attributes,
    timebase,
)
from sbcleans.export.invoker import (
    conformation_params,
    export_conformation,
    export_movies,
    movie_passes,
)
from sbcleans.host.base import MovieExportParams
from sbcleans.host.document import StoryboardDocument


class TestFcpxmlTime:
    def test_23976(self) -> None:
        assert frames_to_fcpxml_time(24, 23.976) == "24024/24000s"

    def test_24(self) -> None:
        assert frames_to_fcpxml_time(24, 24) == "2400/2400s"

    def test_zero(self) -> None:
        assert frames_to_fcpxml_time(0, 23.976) == "0/24000s"

    def test_format_23976(self) -> None:
        fmt = format_attributes(23.976)
        assert fmt["frameDuration"] == "1001/24000s"
        assert fmt["name"] == "FFVideoFormat1080p2398"

    def test_unlisted_rate_uses_hundredths(self) -> None:
        assert timebase(30) == (100, 3000, "30")


class TestGenerateConformationXml:
    @pytest.mark.parametrize(
        "fps, frames, duration, format_name",
        [
            (23.976, 24, "24024/24000s", "FFVideoFormat1080p2398"),
            (24, 24, "2400/2400s", "FFVideoFormat1080p24"),
            (25, 25, "2500/2500s", "FFVideoFormat1080p25"),
            (29.97, 30, "30030/30000s", "FFVideoFormat1080p2997"),
            (30, 30, "3000/3000s", "FFVideoFormat1080p30"),
        ],
    )
    def test_project_frame_rates(
        self, tmp_path: Path, fps: float, frames: int, duration: str, format_name: str
    ) -> None:
        clips = [ConformedClip("SQ010_Sc1_Pn1_v03", tmp_path / "a.png", frames)]
        xml = generate_conformation_xml("Show_SQ010_v03", clips, fps)
        assert f'name="{format_name}"' in xml
        assert f'<sequence format="r1" tcStart="0s" tcFormat="NDF" duration="{duration}">' in xml

    def test_asset_src_is_file_uri(self, tmp_path: Path) -> None:
        clips = [ConformedClip("p", tmp_path / "a b.png", 24)]
        xml = generate_conformation_xml("Show", clips, 23.976)
        assert f'src="{(tmp_path / "a b.png").resolve().as_uri()}"' in xml
        assert "a%20b.png" in xml

    def test_structure(self, tmp_path: Path) -> None:
        clips = [
            ConformedClip("SQ010_Sc1_Pn1_v03", tmp_path / "a.png", 24, scene="1"),
            ConformedClip("SQ010_Sc1_Pn2_v03", tmp_path / "b.png", 48, scene="1"),
        ]
        xml = generate_conformation_xml("Show_SQ010_v03", clips, 23.976)

        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
        assert '<fcpxml version="1.11">' in xml
        assert xml.count("<asset ") == 2
        assert xml.count("<video ") == 2
        assert 'duration="72072/24000s"' in xml
        assert 'offset="24024/24000s"' in xml
        assert 'value="Scene 1"' in xml

    def test_escapes_names(self, tmp_path: Path) -> None:
        clips = [ConformedClip("R&D <1>", tmp_path / "a.png", 24)]
        xml = generate_conformation_xml("Tom & Jerry", clips, 24)
        assert "Tom &amp; Jerry" in xml
        assert "R&amp;D &lt;1&gt;" in xml

    def test_empty(self) -> None:
        xml = generate_conformation_xml("Empty", [], 23.976)
        assert "<video " not in xml
        assert xml.endswith("</fcpxml>")


class TestExportParams:
    def test_movie_passes(self, tmp_path: Path) -> None:
        scene_pass, project_pass = movie_passes(
            tmp_path, tmp_path / "movies", "Show_SQ010_v03", "v03", CleansConfig()
        )
        assert scene_pass.clip_per == "scene"
        assert scene_pass.path == tmp_path / "movies"
        assert scene_pass.pattern == "SQ%0q_Sc%0s_v03"
        assert (scene_pass.width, scene_pass.height) == (1920, 1080)
        assert project_pass.clip_per == "project"
        assert project_pass.path == tmp_path
        assert project_pass.pattern == "Show_SQ010_v03"
        assert project_pass.format == "mov"

    def test_conformation_params(self, tmp_path: Path) -> None:
        params = conformation_params(tmp_path, "Show_SQ010_v03", "v03", CleansConfig())
        assert params.path == tmp_path / "Show_SQ010_v03"
        assert params.pattern == "SQ%0q_Sc%0s_Pn%0p_v03"
        assert params.bitmap_format == "png"
        assert params.target_format == 0

    def test_invalid_clip_per(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            MovieExportParams(path=tmp_path, pattern="x", clip_per="panel")


class TestExportMovies:
    def test_scene_then_project(self, recording_document, tmp_path: Path) -> None:
        movies = tmp_path / "movies"
        written = export_movies(
            recording_document, tmp_path, movies, "Show_SQ1_v03", "v03", CleansConfig()
        )
        assert [c.clip_per for c in recording_document.movie_calls] == ["scene", "project"]
        assert (tmp_path / "Show_SQ1_v03.mov").exists()
        assert (movies / "SQSQ1_ScA_v03.mov").exists()
        assert len(written) == 3

    def test_host_failure_becomes_export_error(
        self, document: StoryboardDocument, tmp_path: Path
    ) -> None:
        with pytest.raises(ExportError):
            export_movies(document, tmp_path, tmp_path, "Show", "v01", CleansConfig())

    def test_filesystem_failure_becomes_export_error(self, tmp_path: Path) -> None:
        class ReadOnlyDocument(StoryboardDocument):
            def export_movie(self, params: MovieExportParams) -> list[Path]:
                raise PermissionError(f"Read-only: {params.path}")

        with pytest.raises(ExportError, match="Movie export failed"):
            export_movies(ReadOnlyDocument(), tmp_path, tmp_path, "Show", "v01", CleansConfig())


class TestExportConformation:
    def test_missing_image_becomes_export_error(self, tmp_path: Path) -> None:
        doc = StoryboardDocument(base_dir=tmp_path)
        doc.add_panel(doc.add_scene("1"), "1", image=Path("missing.png"))
        with pytest.raises(ExportError):
            export_conformation(doc, tmp_path, "Show", "v01", CleansConfig())
