"""Tests du FileSystemAdapter."""

from pathlib import Path

import pytest

from seriesync.adapters.file_system import FileSystemAdapter, is_video_file


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Lost.S01E01.mkv", True),
        ("Lost.S01E01.MP4", True),
        ("Lost.S01E01.srt", False),
        ("Lost.S01E01.sample.mkv", False),
        ("Lost Trailer.mkv", False),
    ],
)
def test_is_video_file(name, expected):
    assert is_video_file(Path(name)) is expected


class TestFileSystemAdapter:
    def test_list_directories_sorted_without_hidden(self, tmp_path):
        for name in ("Lost", "Heroes", ".cache"):
            (tmp_path / name).mkdir()
        (tmp_path / "notes.txt").write_text("x")

        names = [p.name for p in FileSystemAdapter().list_directories(tmp_path)]

        assert names == ["Heroes", "Lost"]

    def test_list_directories_missing_root(self, tmp_path):
        with pytest.raises(OSError):
            FileSystemAdapter().list_directories(tmp_path / "missing")

    def test_list_video_files_recursive(self, tmp_path):
        show = tmp_path / "Lost"
        (show / "Season 2").mkdir(parents=True)
        (show / ".hidden").mkdir()
        (show / "Lost.S01E01.mkv").write_bytes(b"x")
        (show / "Season 2" / "Lost.S02E01.mkv").write_bytes(b"x")
        (show / ".hidden" / "Lost.S03E01.mkv").write_bytes(b"x")
        (show / "Lost.S01E01.nfo").write_text("x")

        files = [p.relative_to(show).as_posix() for p in FileSystemAdapter().list_video_files(show)]

        assert files == ["Lost.S01E01.mkv", "Season 2/Lost.S02E01.mkv"]

    def test_list_video_files_missing_directory(self, tmp_path):
        assert list(FileSystemAdapter().list_video_files(tmp_path / "missing")) == []

    def test_get_size(self, tmp_path):
        path = tmp_path / "a.mkv"
        path.write_bytes(b"12345")

        assert FileSystemAdapter().get_size(path) == 5
        assert FileSystemAdapter().get_size(tmp_path / "missing.mkv") == 0
