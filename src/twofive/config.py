# -*- coding: utf-8 -*-
"""
RU: Типизированная конфигурация читателя штрихкодов.
EN: Typed reader configuration built from ``load_config()`` dictionaries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final, Mapping, Optional, Union

from twofive.errors import ConfigError
from twofive.model.enums import GrayScaleMethod, MonoThreshold, Symbology

if TYPE_CHECKING:
    from PIL import Image

    from twofive.reader.base import BarcodeReader2of5

logger = logging.getLogger(__name__)

__all__ = ["ReaderConfig", "ConfigError"]

_KNOWN_KEYS: Final[frozenset[str]] = frozenset(
    {"symbology", "digit_count", "gray_method", "mono_threshold", "log_level"}
)


@dataclass(frozen=True)
class ReaderConfig:
    """
    Reader configuration.

    Attributes:
        symbology: Which two-of-five variant to read.
        digit_count: Digit groups per symbol; values below 1 become 1.
        gray_method: Gray conversion applied before thresholding.
        mono_threshold: Binarisation level, or None to use the image as is.

    Examples:
        >>> cfg = ReaderConfig.from_dict({"symbology": "interleaved", "digit_count": 3})
        >>> cfg.create_reader().digit_count
        3
        >>> ReaderConfig(digit_count=0).digit_count
        1
    """

    symbology: Symbology = Symbology.INDUSTRIAL
    digit_count: int = 1
    gray_method: GrayScaleMethod = GrayScaleMethod.NTSC
    mono_threshold: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate and normalise parameters."""
        try:
            object.__setattr__(self, "symbology", Symbology(self.symbology))
        except ValueError:
            raise ConfigError(
                f"unknown symbology {self.symbology!r}", key="symbology"
            ) from None
        try:
            object.__setattr__(self, "gray_method", GrayScaleMethod(self.gray_method))
        except ValueError:
            raise ConfigError(
                f"unknown gray_method {self.gray_method!r}", key="gray_method"
            ) from None

        if isinstance(self.digit_count, bool) or not isinstance(self.digit_count, int):
            raise ConfigError(
                f"digit_count must be int, got {type(self.digit_count).__name__}",
                key="digit_count",
            )
        if self.digit_count < 1:
            logger.debug("digit_count %d coerced to 1", self.digit_count)
            object.__setattr__(self, "digit_count", 1)

        if self.mono_threshold is not None:
            level = self.mono_threshold
            if isinstance(level, bool) or not isinstance(level, int) or not 0 <= level <= 256:
                raise ConfigError(
                    f"mono_threshold must be an int in 0..256, got {level!r}",
                    key="mono_threshold",
                )

    @staticmethod
    def from_preset(
        preset: Union[MonoThreshold, str],
        symbology: Symbology = Symbology.INDUSTRIAL,
        digit_count: int = 1,
    ) -> "ReaderConfig":
        """Configuration using a named threshold preset."""
        level = preset if isinstance(preset, MonoThreshold) else MonoThreshold.from_name(preset)
        return ReaderConfig(
            symbology=symbology,
            digit_count=digit_count,
            mono_threshold=int(level),
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ReaderConfig":
        """
        Build from a ``load_config()`` dictionary.

        ``mono_threshold`` may be an int or a preset name ("medium").
        Unknown keys are ignored with a warning.
        """
        unknown = set(data) - _KNOWN_KEYS
        if unknown:
            logger.warning("Ignoring unknown configuration keys: %s", sorted(unknown))

        threshold = data.get("mono_threshold")
        if isinstance(threshold, str):
            try:
                threshold = int(MonoThreshold.from_name(threshold))
            except ValueError as e:
                raise ConfigError(str(e), key="mono_threshold") from e

        return cls(
            symbology=data.get("symbology", Symbology.INDUSTRIAL),
            digit_count=data.get("digit_count", 1),
            gray_method=data.get("gray_method", GrayScaleMethod.NTSC),
            mono_threshold=threshold,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "symbology": self.symbology.value,
            "digit_count": self.digit_count,
            "gray_method": self.gray_method.value,
            "mono_threshold": self.mono_threshold,
        }

    def create_reader(self) -> "BarcodeReader2of5":
        from twofive.reader.factory import create_reader

        return create_reader(self.symbology, self.digit_count)

    def read_image(self, image: "Image.Image") -> Optional[str]:
        """Binarise (if configured) and decode ``image``."""
        from twofive.reader.factory import read_barcode

        return read_barcode(
            image,
            symbology=self.symbology,
            digit_count=self.digit_count,
            threshold=self.mono_threshold,
            method=self.gray_method,
        )
