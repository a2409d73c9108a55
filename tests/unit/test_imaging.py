import pytest
from PIL import Image

from twofive.imaging import gray_value, to_gray, to_mono, trim
from twofive.model.enums import GrayScaleMethod, MonoThreshold


class TestGrayValue:
    @pytest.mark.parametrize(
        "method,pixel,expected",
        [
            (GrayScaleMethod.BASIC, (30, 60, 90), 60),
            (GrayScaleMethod.BASIC, (255, 255, 255), 255),
            (GrayScaleMethod.MIDDLE_VALUE, (10, 200, 50), 105),
            (GrayScaleMethod.NTSC, (0, 0, 0), 0),
            (GrayScaleMethod.NTSC, (100, 100, 100), 99),
            (GrayScaleMethod.NTSC, (255, 0, 0), 76),
        ],
    )
    def test_methods(self, method: GrayScaleMethod, pixel: tuple, expected: int) -> None:
        assert gray_value(pixel, method) == expected

    def test_accepts_string_method(self) -> None:
        assert gray_value((30, 60, 90), "basic") == 60  # type: ignore[arg-type]

    def test_unknown_method(self) -> None:
        with pytest.raises(ValueError, match="Unsupported"):
            gray_value((0, 0, 0), "luma")  # type: ignore[arg-type]


class TestConversion:
    @pytest.fixture
    def image(self) -> Image.Image:
        img = Image.new("RGB", (3, 1))
        img.putpixel((0, 0), (20, 20, 20))
        img.putpixel((1, 0), (130, 130, 130))
        img.putpixel((2, 0), (250, 240, 230))
        return img

    def test_to_gray_equal_channels(self, image: Image.Image) -> None:
        gray = to_gray(image, GrayScaleMethod.BASIC)
        assert gray.mode == "RGB"
        assert gray.getpixel((0, 0)) == (20, 20, 20)
        assert gray.getpixel((2, 0)) == (240, 240, 240)

    def test_to_mono(self, image: Image.Image) -> None:
        mono = to_mono(image, GrayScaleMethod.BASIC, MonoThreshold.MEDIUM)
        assert [mono.getpixel((x, 0)) for x in range(3)] == [
            (0, 0, 0),
            (255, 255, 255),
            (255, 255, 255),
        ]

    def test_threshold_is_inclusive_for_white(self, image: Image.Image) -> None:
        mono = to_mono(image, GrayScaleMethod.BASIC, 130)
        assert mono.getpixel((1, 0)) == (255, 255, 255)
        mono = to_mono(image, GrayScaleMethod.BASIC, 131)
        assert mono.getpixel((1, 0)) == (0, 0, 0)

    def test_alpha_dropped(self) -> None:
        img = Image.new("RGBA", (1, 1), (0, 0, 0, 0))
        mono = to_mono(img)
        assert mono.mode == "RGB"
        assert mono.getpixel((0, 0)) == (0, 0, 0)

    def test_grayscale_source(self) -> None:
        img = Image.new("L", (2, 1), 200)
        assert to_mono(img, threshold=MonoThreshold.VERY_HIGH).getpixel((0, 0)) == (0, 0, 0)

    @pytest.mark.parametrize("level", [-1, 300])
    def test_threshold_range(self, image: Image.Image, level: int) -> None:
        with pytest.raises(ValueError, match="threshold"):
            to_mono(image, threshold=level)

    def test_rejects_non_image(self) -> None:
        with pytest.raises(TypeError):
            to_gray("not an image")  # type: ignore[arg-type]


class TestTrim:
    def test_trim(self) -> None:
        img = Image.new("RGB", (10, 6), "white")
        img.putpixel((4, 3), (0, 0, 0))
        cropped = trim(img, (2, 1, 8, 5))
        assert cropped.size == (6, 4)
        assert cropped.getpixel((2, 2)) == (0, 0, 0)

    @pytest.mark.parametrize("box", [(0, 0, 11, 5), (5, 0, 5, 5), (-1, 0, 4, 4)])
    def test_invalid_box(self, box: tuple) -> None:
        with pytest.raises(ValueError, match="Invalid crop box"):
            trim(Image.new("RGB", (10, 6)), box)

    def test_rejects_non_image(self) -> None:
        with pytest.raises(TypeError, match="PIL.Image.Image"):
            trim("not an image", (0, 0, 1, 1))  # type: ignore[arg-type]


class TestWholeImageConversion:
    """Whole-image conversion must agree with the per-pixel gray_value."""

    @pytest.fixture
    def palette_image(self) -> Image.Image:
        img = Image.new("RGB", (64, 4))
        for i in range(256):
            img.putpixel((i % 64, i // 64), (i, (i * 37) % 256, (i * 101) % 256))
        return img

    @pytest.mark.parametrize("method", list(GrayScaleMethod))
    def test_to_gray_matches_gray_value(
        self, palette_image: Image.Image, method: GrayScaleMethod
    ) -> None:
        gray = to_gray(palette_image, method)
        for y in range(palette_image.height):
            for x in range(palette_image.width):
                expected = gray_value(palette_image.getpixel((x, y)), method)
                assert gray.getpixel((x, y)) == (expected, expected, expected)

    @pytest.mark.parametrize("method", list(GrayScaleMethod))
    @pytest.mark.parametrize("level", [0, 126, 256])
    def test_to_mono_matches_gray_value(
        self, palette_image: Image.Image, method: GrayScaleMethod, level: int
    ) -> None:
        mono = to_mono(palette_image, method, level)
        for y in range(palette_image.height):
            for x in range(palette_image.width):
                white = gray_value(palette_image.getpixel((x, y)), method) >= level
                expected = (255, 255, 255) if white else (0, 0, 0)
                assert mono.getpixel((x, y)) == expected

    def test_large_image_performance(self) -> None:
        """Проверить, что монохром большого изображения выполняется быстро."""
        import time

        img = Image.new("RGB", (2000, 1500), (90, 140, 200))
        start = time.perf_counter()
        to_mono(img, GrayScaleMethod.NTSC, MonoThreshold.MEDIUM)
        elapsed = time.perf_counter() - start

        assert elapsed < 1.0, f"to_mono заняла {elapsed:.2f}с, ожидалось < 1с"
