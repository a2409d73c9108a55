import logging
from typing import Any, Dict

import pytest
from PIL import Image

from twofive.barcodegen import PatternGenerator
from twofive.config import ConfigError, ReaderConfig
from twofive.model.enums import GrayScaleMethod, MonoThreshold, Symbology
from twofive.reader import IndustrialBarcodeReader, InterleavedBarcodeReader


class TestReaderConfig:
    def test_defaults(self) -> None:
        cfg = ReaderConfig()
        assert cfg.symbology is Symbology.INDUSTRIAL
        assert cfg.digit_count == 1
        assert cfg.gray_method is GrayScaleMethod.NTSC
        assert cfg.mono_threshold is None

    def test_strings_normalised_to_enums(self) -> None:
        cfg = ReaderConfig(symbology="interleaved", gray_method="basic")  # type: ignore[arg-type]
        assert cfg.symbology is Symbology.INTERLEAVED
        assert cfg.gray_method is GrayScaleMethod.BASIC

    @pytest.mark.parametrize("count", [0, -5])
    def test_digit_count_coerced(self, count: int) -> None:
        assert ReaderConfig(digit_count=count).digit_count == 1

    @pytest.mark.parametrize(
        "kwargs,key",
        [
            ({"symbology": "code39"}, "symbology"),
            ({"gray_method": "luma"}, "gray_method"),
            ({"digit_count": "3"}, "digit_count"),
            ({"digit_count": True}, "digit_count"),
            ({"mono_threshold": 300}, "mono_threshold"),
            ({"mono_threshold": 1.5}, "mono_threshold"),
        ],
    )
    def test_invalid_values(self, kwargs: Dict[str, Any], key: str) -> None:
        with pytest.raises(ConfigError) as exc_info:
            ReaderConfig(**kwargs)
        assert exc_info.value.key == key
        assert isinstance(exc_info.value, ValueError)

    def test_frozen(self) -> None:
        cfg = ReaderConfig()
        with pytest.raises(AttributeError):
            cfg.digit_count = 4  # type: ignore[misc]

    def test_from_preset(self) -> None:
        cfg = ReaderConfig.from_preset("low", Symbology.INTERLEAVED, 2)
        assert cfg.mono_threshold == 84
        assert cfg.symbology is Symbology.INTERLEAVED
        assert ReaderConfig.from_preset(MonoThreshold.VERY_LOW).mono_threshold == 42

    def test_from_dict(self) -> None:
        cfg = ReaderConfig.from_dict(
            {"symbology": "interleaved", "digit_count": 4, "mono_threshold": "very_high"}
        )
        assert cfg.digit_count == 4
        assert cfg.mono_threshold == 212

    def test_from_dict_unknown_preset(self) -> None:
        with pytest.raises(ConfigError, match="Unknown threshold preset"):
            ReaderConfig.from_dict({"mono_threshold": "extreme"})

    def test_from_dict_warns_on_unknown_keys(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="twofive"):
            ReaderConfig.from_dict({"ui_theme": "dark", "log_level": "DEBUG"})
        messages = [rec.getMessage() for rec in caplog.records]
        assert any("ui_theme" in msg for msg in messages)
        assert not any("log_level" in msg for msg in messages)

    def test_to_dict(self) -> None:
        cfg = ReaderConfig(Symbology.INTERLEAVED, 2, GrayScaleMethod.BASIC, 126)
        assert cfg.to_dict() == {
            "symbology": "interleaved",
            "digit_count": 2,
            "gray_method": "basic",
            "mono_threshold": 126,
        }
        assert ReaderConfig.from_dict(cfg.to_dict()) == cfg

    def test_create_reader(self) -> None:
        assert isinstance(ReaderConfig().create_reader(), IndustrialBarcodeReader)
        reader = ReaderConfig(Symbology.INTERLEAVED, 3).create_reader()
        assert isinstance(reader, InterleavedBarcodeReader)
        assert reader.digit_count == 3

    def test_read_image_with_threshold(self) -> None:
        img = PatternGenerator(
            Symbology.INDUSTRIAL, "507", {"foreground": (40, 40, 40)}
        ).render_image()
        # dark gray bars are not black until binarised
        assert ReaderConfig(digit_count=3).read_image(img) is None
        cfg = ReaderConfig(digit_count=3, mono_threshold=int(MonoThreshold.MEDIUM))
        assert cfg.read_image(img) == "507"

    def test_read_image_interleaved(self) -> None:
        img = PatternGenerator(Symbology.INTERLEAVED, "0429").render_image()
        assert isinstance(img, Image.Image)
        assert ReaderConfig(Symbology.INTERLEAVED, 2).read_image(img) == "0429"
