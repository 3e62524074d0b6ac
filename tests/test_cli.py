"""Tests for gridcat.cli."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

import gridcat.session
from gridcat.cli import main
from gridcat.geometry import GeometryTracker


@pytest.fixture
def fake_terminal(monkeypatch, tty_device: str, winsize) -> None:
    monkeypatch.setattr(
        gridcat.session,
        "GeometryTracker",
        lambda: GeometryTracker(device=tty_device, query=winsize),
    )
    for var in ("GRIDCAT_COLUMNS", "GRIDCAT_ROWS", "GRIDCAT_MAX_IMAGES", "GRIDCAT_WORKERS"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def image_dir(tmp_path: Path, make_image) -> Path:
    for i in range(5):
        make_image(f"test_images/image{i}.png", size=(20, 20))
    for i in range(3):
        make_image(f"test_images/subdir/sub_image{i}.png", size=(20, 20))
    return tmp_path / "test_images"


def _count_images(output: str) -> int:
    return output.count("\x1b_Gf=1,t=d,")


class TestCli:
    def test_no_arguments(self) -> None:
        result = CliRunner().invoke(main, [])
        assert result.exit_code == 1
        assert "Please specify a directory" in result.output

    def test_invalid_directory(self, fake_terminal, tmp_path: Path) -> None:
        result = CliRunner().invoke(main, [str(tmp_path / "invalid_dir")])
        assert result.exit_code == 1
        assert "Error discovering images" in result.output

    def test_empty_directory(self, fake_terminal, tmp_path: Path) -> None:
        empty = tmp_path / "empty_test_dir"
        empty.mkdir()
        result = CliRunner().invoke(main, [str(empty)])
        assert result.exit_code == 0
        assert "No images found" in result.output

    def test_valid_directory(self, fake_terminal, image_dir: Path) -> None:
        result = CliRunner().invoke(main, [str(image_dir)])
        assert result.exit_code == 0, result.output
        assert _count_images(result.output) == 5

    def test_recursive_flag(self, fake_terminal, image_dir: Path) -> None:
        result = CliRunner().invoke(main, ["-r", str(image_dir)])
        assert result.exit_code == 0, result.output
        assert _count_images(result.output) == 8

    def test_max_images_limit(self, fake_terminal, image_dir: Path) -> None:
        result = CliRunner().invoke(main, ["-n", "2", str(image_dir)])
        assert result.exit_code == 0, result.output
        assert _count_images(result.output) == 2

    def test_max_images_must_be_positive(self, fake_terminal, image_dir: Path) -> None:
        result = CliRunner().invoke(main, ["-n", "0", str(image_dir)])
        assert result.exit_code == 1
        assert "Invalid value" in result.output

    def test_unknown_option(self, fake_terminal, image_dir: Path) -> None:
        result = CliRunner().invoke(main, ["--bogus", str(image_dir)])
        assert result.exit_code == 1
        assert "No such option" in result.output

    def test_help_exits_zero(self) -> None:
        result = CliRunner().invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "--max-images" in result.output

    def test_grid_options(self, fake_terminal, image_dir: Path) -> None:
        result = CliRunner().invoke(main, ["-x", "2", "-y", "1", str(image_dir)])
        assert result.exit_code == 0, result.output
        assert "w=400,h=480" in result.output
        assert result.output.count("\n") >= 2

    def test_columns_from_env(self, fake_terminal, image_dir: Path, monkeypatch) -> None:
        monkeypatch.setenv("GRIDCAT_COLUMNS", "8")
        result = CliRunner().invoke(main, [str(image_dir)])
        assert result.exit_code == 0, result.output
        assert "w=100,h=120" in result.output

    def test_no_terminal(self, fake_terminal, image_dir: Path, winsize) -> None:
        winsize.reply = None
        result = CliRunner().invoke(main, [str(image_dir)])
        assert result.exit_code == 1
        assert "Error querying terminal size" in result.output

    def test_corrupt_image_does_not_abort(self, fake_terminal, image_dir: Path) -> None:
        (image_dir / "image9.png").write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 100)
        result = CliRunner().invoke(main, [str(image_dir)])
        assert result.exit_code == 0, result.output
        assert _count_images(result.output) == 5
        assert "1 of 6 images could not be shown" in result.output
