"""Tests for sbcleans.folders module."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from sbcleans.config import Subfolders
from sbcleans.folders import create_directories, next_folder_name, organize_files

TODAY = date(2024, 5, 8)


class TestNextFolderName:
    def test_first_folder(self, tmp_path: Path) -> None:
        assert next_folder_name(tmp_path, "050824") == "050824_CLEANS"

    def test_skips_existing(self, tmp_path: Path) -> None:
        (tmp_path / "050824_CLEANS").mkdir()
        (tmp_path / "050824_CLEANS_02").mkdir()
        assert next_folder_name(tmp_path, "050824") == "050824_CLEANS_03"

    def test_existing_file_counts_as_taken(self, tmp_path: Path) -> None:
        (tmp_path / "050824_CLEANS").write_text("")
        assert next_folder_name(tmp_path, "050824") == "050824_CLEANS_02"

    def test_other_days_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "050724_CLEANS").mkdir()
        assert next_folder_name(tmp_path, "050824") == "050824_CLEANS"


class TestCreateDirectories:
    def test_creates_tree(self, tmp_path: Path) -> None:
        dirs = create_directories(tmp_path, today=TODAY)
        assert dirs.cleans == tmp_path / "050824_CLEANS"
        assert dirs.movies == dirs.cleans / "Scene Quicktimes"
        assert dirs.panels == dirs.cleans / "Panels"
        assert dirs.audio == dirs.cleans / "Audio"
        for path in (dirs.cleans, dirs.movies, dirs.panels, dirs.audio):
            assert path.is_dir()

    def test_second_run_same_day(self, tmp_path: Path) -> None:
        create_directories(tmp_path, today=TODAY)
        create_directories(tmp_path, today=TODAY)
        dirs = create_directories(tmp_path, today=TODAY)
        assert dirs.cleans.name == "050824_CLEANS_03"

    def test_custom_names(self, tmp_path: Path) -> None:
        dirs = create_directories(
            tmp_path,
            today=TODAY,
            suffix="_BOARDS",
            subfolders=Subfolders(movies="Movies", panels="Stills", audio="Sound"),
        )
        assert dirs.cleans.name == "050824_BOARDS"
        assert dirs.movies.name == "Movies"
        assert dirs.panels.is_dir()

    def test_missing_export_path_is_created(self, tmp_path: Path) -> None:
        dirs = create_directories(tmp_path / "new", today=TODAY)
        assert dirs.cleans.is_dir()


class TestOrganizeFiles:
    @pytest.fixture
    def dirs(self, tmp_path: Path):
        return create_directories(tmp_path, today=TODAY)

    def test_mixed_directory(self, dirs) -> None:
        for name in ("SQ010_Sc1_Pn1_v03.png", "temp.wav", "notes.txt"):
            (dirs.cleans / name).write_bytes(b"x")

        result = organize_files(dirs)

        assert (dirs.panels / "SQ010_Sc1_Pn1_v03.png").exists()
        assert (dirs.audio / "temp.wav").exists()
        assert (dirs.cleans / "notes.txt").exists()
        assert not (dirs.cleans / "SQ010_Sc1_Pn1_v03.png").exists()
        assert not (dirs.cleans / "temp.wav").exists()
        assert len(result.panels) == 1
        assert len(result.audio) == 1

    def test_all_audio_extensions(self, dirs) -> None:
        names = ["a.wav", "b.aif", "c.aiff", "d.mp3", "e.flac"]
        for name in names:
            (dirs.cleans / name).write_bytes(b"x")

        result = organize_files(dirs)

        assert sorted(p.name for p in result.audio) == ["a.wav", "b.aif", "c.aiff", "d.mp3"]
        assert (dirs.cleans / "e.flac").exists()

    def test_no_audio_is_noop(self, dirs) -> None:
        (dirs.cleans / "p.png").write_bytes(b"x")
        result = organize_files(dirs)
        assert result.audio == []
        assert list(dirs.audio.iterdir()) == []

    def test_movies_and_xml_stay(self, dirs) -> None:
        (dirs.cleans / "Show_SQ010_v03.mov").write_bytes(b"x")
        (dirs.cleans / "Show_SQ010_v03.xml").write_text("<fcpxml/>")
        organize_files(dirs)
        assert (dirs.cleans / "Show_SQ010_v03.mov").exists()
        assert (dirs.cleans / "Show_SQ010_v03.xml").exists()

    def test_subfolders_not_scanned(self, dirs) -> None:
        (dirs.movies / "clip.png").write_bytes(b"x")
        result = organize_files(dirs)
        assert result.panels == []
        assert (dirs.movies / "clip.png").exists()

    def test_uppercase_extension(self, dirs) -> None:
        (dirs.cleans / "LOUD.WAV").write_bytes(b"x")
        organize_files(dirs)
        assert (dirs.audio / "LOUD.WAV").exists()
