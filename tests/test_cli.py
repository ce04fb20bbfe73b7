"""Smoke tests for the command line driver."""

import logging
import logging.handlers

import pytest
from PIL import Image

from orbit_rtx import config
from orbit_rtx.cli import BLOCK_LAYERS, block_palette, block_scene, main, parse_args, sphere_scene


class TestScenes:
    """Demo scene construction."""

    def test_sphere_scene_is_valid(self):
        world, camera, light = sphere_scene()
        world.validate()
        assert len(world.bodies) == 5

    def test_sphere_scene_with_texture(self, tmp_path):
        path = tmp_path / "checker.png"
        Image.new("RGB", (4, 4), (200, 10, 10)).save(path)
        world, _, _ = sphere_scene(path)
        world.validate()
        assert path in world.textures

    def test_block_scene_is_valid(self):
        world, _, _ = block_scene()
        world.validate()
        assert len(world.bodies) == 45 + 14 + 7 + 3

    def test_block_palette_covers_layers(self):
        palette = block_palette()
        assert set(palette) == set("RBIGYPCWK")
        used = {ch for layer in BLOCK_LAYERS for row in layer for ch in row if ch != " "}
        assert used <= set(palette)


class TestMain:
    """End-to-end runs writing PNG files."""

    def test_single_frame(self, tmp_path):
        out = tmp_path / "render"
        assert main(["--width", "8", "--height", "6", "--output", str(out)]) == 0
        with Image.open(tmp_path / "render.png") as im:
            assert im.size == (8, 6)

    def test_orbit_sequence(self, tmp_path):
        out = tmp_path / "turn"
        code = main(["--scene", "blocks", "--width", "6", "--height", "4", "--frames", "2",
                     "--yaw-step", "15", "--zoom-step", "0.2", "--output", str(out)])
        assert code == 0
        assert (tmp_path / "turn_0000.png").exists()
        assert (tmp_path / "turn_0001.png").exists()

    def test_missing_texture_file_fails_cleanly(self, tmp_path):
        code = main(["--width", "4", "--height", "4", "--texture", str(tmp_path / "none.png"),
                     "--output", str(tmp_path / "x")])
        assert code == 1

    @pytest.mark.parametrize("scene", ["spheres", "blocks"])
    def test_scene_choice(self, tmp_path, scene):
        assert main(["--scene", scene, "--width", "4", "--height", "3",
                     "--output", str(tmp_path / scene)]) == 0

    def test_log_file_is_written(self, tmp_path):
        log_file = tmp_path / "logs" / "rtx.log"
        logger = logging.getLogger("orbit_rtx")
        try:
            assert main(["--width", "4", "--height", "3", "--output", str(tmp_path / "f"),
                         "--log-level", "INFO", "--log-file", str(log_file)]) == 0
        finally:
            for handler in [h for h in logger.handlers
                            if isinstance(h, logging.handlers.RotatingFileHandler)]:
                logger.removeHandler(handler)
                handler.close()
        assert "wrote" in log_file.read_text()


class TestArguments:
    """Command line validation."""

    @pytest.mark.parametrize("flag", ["--width", "--height", "--frames", "--workers"])
    @pytest.mark.parametrize("value", ["0", "-3"])
    def test_non_positive_counts_are_rejected(self, flag, value, capsys):
        with pytest.raises(SystemExit) as exc:
            parse_args([flag, value])
        assert exc.value.code == 2
        assert "must be a positive integer" in capsys.readouterr().err

    def test_log_file_defaults_to_none(self, monkeypatch):
        monkeypatch.setattr(config, "LOG_FILE", None)
        assert parse_args([]).log_file is None
