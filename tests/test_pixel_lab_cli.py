"""
Tests for the pixel_lab command line tool.
"""

import pytest
from PIL import Image

from pixel_lab import main


@pytest.fixture
def input_image(tmp_path):
    path = tmp_path / "input.png"
    Image.new("RGBA", (3, 2), (100, 150, 200, 255)).save(path)
    return path


class TestPixelLabCli:
    """Tests for main()."""

    def test_no_arguments_prints_usage(self, capsys):
        assert main([]) == 1
        assert "Usage:" in capsys.readouterr().out

    def test_usage_lists_registered_operations(self, capsys):
        main(["only-one-arg"])

        out = capsys.readouterr().out
        assert "Color operations:" in out
        assert "Geometry operations:" in out
        assert "Rotate clockwise by 90, 180 or 270 degrees" in out
        assert out.index("xor") < out.index("Geometry operations:") < out.index("flip")

    def test_grayscale_default_output(self, input_image, tmp_path):
        assert main([str(input_image), "grayscale"]) == 0

        output = tmp_path / "input_grayscale.png"
        with Image.open(output) as image:
            r, g, b, a = image.convert("RGBA").getpixel((0, 0))

        assert r == g == b
        assert a == 255

    def test_binary_with_threshold_and_output(self, input_image, tmp_path, capsys):
        output = tmp_path / "bw.png"

        assert main([str(input_image), "binary", "200", str(output)]) == 0

        with Image.open(output) as image:
            assert image.convert("RGBA").getpixel((2, 1)) == (0, 0, 0, 255)
        assert "Saved 3x2 result" in capsys.readouterr().out

    def test_xor_with_second_image(self, input_image, tmp_path):
        mask = tmp_path / "mask.png"
        Image.new("RGBA", (3, 2), (100, 150, 200, 255)).save(mask)
        output = tmp_path / "xor.png"

        assert main([str(input_image), "xor", str(mask), str(output)]) == 0

        with Image.open(output) as image:
            assert image.convert("RGBA").getpixel((1, 1)) == (0, 0, 0, 255)

    def test_rotate_swaps_size(self, input_image, tmp_path):
        output = tmp_path / "rotated.png"

        assert main([str(input_image), "rotate", "90", str(output)]) == 0

        with Image.open(output) as image:
            assert image.size == (2, 3)

    def test_invalid_operation(self, input_image, capsys):
        assert main([str(input_image), "sharpen"]) == 1
        assert "Invalid operation" in capsys.readouterr().out

    def test_missing_input_file(self, tmp_path):
        assert main([str(tmp_path / "missing.png"), "grayscale"]) == 1

    def test_required_argument_missing(self, input_image, capsys):
        assert main([str(input_image), "and"]) == 1
        assert "requires an argument" in capsys.readouterr().out

    def test_brightness_out_of_range(self, input_image, capsys):
        assert main([str(input_image), "brightness", "500"]) == 1
        assert "Error:" in capsys.readouterr().out
