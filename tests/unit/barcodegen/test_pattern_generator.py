from io import BytesIO
from typing import Any, Dict

import pytest
from PIL import Image

from twofive.barcodegen import PatternGenerator, PatternGenError, digit_wide_flags
from twofive.model.enums import Symbology


class TestPatternGenerator:
    """Test suite for PatternGenerator geometry and validation."""

    @pytest.fixture
    def industrial_generator(self) -> PatternGenerator:
        return PatternGenerator(Symbology.INDUSTRIAL, "12")

    @pytest.fixture
    def interleaved_generator(self) -> PatternGenerator:
        return PatternGenerator(Symbology.INTERLEAVED, "12")

    # === Initialization ===
    def test_init_defaults(self) -> None:
        gen = PatternGenerator(Symbology.INDUSTRIAL, "1")
        assert gen.options["narrow"] == 2
        assert gen.options["wide"] == 5
        assert gen.options["quiet_zone"] == 10

    def test_init_with_options(self) -> None:
        gen = PatternGenerator(Symbology.INDUSTRIAL, "1", {"narrow": 3, "wide": 8})
        assert (gen.options["narrow"], gen.options["wide"]) == (3, 8)
        assert gen.options["height"] == 20

    def test_init_requires_enum(self) -> None:
        with pytest.raises(TypeError, match="Symbology enum"):
            PatternGenerator("industrial", "1")  # type: ignore[arg-type]

    # === Validation ===
    @pytest.mark.parametrize(
        "symbology,data,match",
        [
            (Symbology.INDUSTRIAL, "", "non-empty"),
            (Symbology.INDUSTRIAL, "12a", "digits only"),
            (Symbology.INDUSTRIAL, "١٢", "digits only"),
            (Symbology.INTERLEAVED, "123", "even number"),
        ],
    )
    def test_validate_data(self, symbology: Symbology, data: str, match: str) -> None:
        with pytest.raises(PatternGenError, match=match):
            PatternGenerator(symbology, data).validate()

    @pytest.mark.parametrize(
        "options,match",
        [
            ({"narrow": 0}, "narrow < wide"),
            ({"narrow": 5, "wide": 5}, "narrow < wide"),
            ({"narrow": 2.5}, "integers"),
            ({"quiet_zone": 0}, "quiet_zone"),
            ({"height": 0}, "height"),
        ],
    )
    def test_validate_options(self, options: Dict[str, Any], match: str) -> None:
        gen = PatternGenerator(Symbology.INDUSTRIAL, "1", options)  # type: ignore[arg-type]
        with pytest.raises(PatternGenError, match=match):
            gen.validate()

    # === Digit patterns ===
    @pytest.mark.parametrize("digit", range(10))
    def test_digit_has_two_wide(self, digit: int) -> None:
        assert sum(digit_wide_flags(digit)) == 2

    def test_digit_out_of_range(self) -> None:
        with pytest.raises(PatternGenError):
            digit_wide_flags(10)

    # === Runs ===
    def test_industrial_runs(self, industrial_generator: PatternGenerator) -> None:
        runs = industrial_generator.encode_runs()
        assert runs[0] == (False, 10) and runs[-1] == (False, 10)
        bars = [length for is_black, length in runs if is_black]
        # start + 2 digits + stop
        assert len(bars) == 3 + 10 + 3
        assert bars[:3] == [5, 5, 2]
        assert bars[-3:] == [5, 2, 5]
        # runs alternate colour
        assert all(a[0] != b[0] for a, b in zip(runs, runs[1:]))

    def test_interleaved_runs(self, interleaved_generator: PatternGenerator) -> None:
        runs = interleaved_generator.encode_runs()
        assert runs[1:5] == [(True, 2), (False, 2), (True, 2), (False, 2)]
        assert runs[-4:] == [(True, 5), (False, 2), (True, 2), (False, 10)]
        value = runs[5:15]
        # "1" in bars, "2" in spaces
        assert [length for is_black, length in value if is_black] == [5, 2, 2, 2, 5]
        assert [length for is_black, length in value if not is_black] == [2, 5, 2, 2, 5]

    def test_digit_count(self) -> None:
        assert PatternGenerator(Symbology.INDUSTRIAL, "1234").digit_count == 4
        assert PatternGenerator(Symbology.INTERLEAVED, "1234").digit_count == 2

    def test_render_row_width(self, industrial_generator: PatternGenerator) -> None:
        row = industrial_generator.render_row()
        assert len(row) == sum(length for _, length in industrial_generator.encode_runs())

    # === Rendering ===
    def test_render_image(self, industrial_generator: PatternGenerator) -> None:
        img = industrial_generator.render_image(height=7)
        assert isinstance(img, Image.Image)
        assert img.mode == "RGB"
        assert img.height == 7
        assert img.width == len(industrial_generator.render_row())
        assert img.getpixel((10, 6)) == (0, 0, 0)
        assert img.getpixel((9, 0)) == (255, 255, 255)

    def test_render_image_matches_row(self, interleaved_generator: PatternGenerator) -> None:
        img = interleaved_generator.render_image(height=2)
        row = interleaved_generator.render_row()
        assert [img.getpixel((x, 1)) == (0, 0, 0) for x in range(img.width)] == row

    def test_render_image_invalid_height(self, industrial_generator: PatternGenerator) -> None:
        with pytest.raises(PatternGenError, match="height"):
            industrial_generator.render_image(height=0)

    def test_render_bytes(self, industrial_generator: PatternGenerator) -> None:
        data = industrial_generator.render_bytes()
        assert data.startswith(b"\x89PNG")
        img = Image.open(BytesIO(data))
        assert img.size == (len(industrial_generator.render_row()), 20)
