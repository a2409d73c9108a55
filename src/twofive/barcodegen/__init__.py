"""
barcodegen

Генерация эталонных символов «2 из 5» в точной геометрии, которую ожидают
читатели: для тестов, калибровки и печати образцов.

Public API:
    - PatternGenerator: кодирование цифр в серии и рендеринг в PIL Image (class)
    - digit_wide_flags: шаблон широких/узких элементов одной цифры

Примеры:
    >>> from twofive.barcodegen import PatternGenerator
    >>> from twofive.model.enums import Symbology
    >>> img = PatternGenerator(Symbology.INTERLEAVED, "1234").render_image()

Зависимости:
    Pillow
"""

from .pattern_generator import (
    PatternGenerator,
    PatternGenError,
    PatternOptions,
    digit_wide_flags,
)

__all__ = [
    "PatternGenerator",
    "PatternGenError",
    "PatternOptions",
    "digit_wide_flags",
]
