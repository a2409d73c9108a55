"""
Пакет twofive
=============

Чтение одномерных штрихкодов семейства «2 из 5» (Industrial 2 of 5 и
Interleaved 2 of 5) с растрового изображения.

Этот пакет предоставляет:
    - Сканирование одной строки пикселей и разбиение её на серии (bars/spaces)
    - Адаптивную калибровку ширины широких и узких элементов
    - Декодирование по весам позиций (1, 2, 4, 7, 0) с проверкой чётности
    - Предобработку изображений (оттенки серого, монохром по порогу)
    - Генерацию эталонных изображений штрихкодов для тестов

Пример базового использования:
    >>> from PIL import Image
    >>> from twofive import Symbology, read_barcode
    >>>
    >>> img = Image.open("label.png")
    >>> read_barcode(img, Symbology.INDUSTRIAL, digit_count=6)
    '123456'

Управление конфигурацией:
    >>> import os
    >>> os.environ["TWOFIVE_LOG_LEVEL"] = "DEBUG"
    >>>
    >>> from twofive import ReaderConfig, load_config
    >>>
    >>> config = ReaderConfig.from_dict(load_config())
    >>> reader = config.create_reader()

Автор: twofive Development Team
Версия: 0.1.0
Лицензия: MIT
Python: 3.11+
"""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__author__ = "twofive Development Team"
__description__ = "Industrial and Interleaved 2 of 5 barcode reader for raster images"
__license__ = "MIT"
__python_requires__ = ">=3.11"

VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

# =============================================================================
# ПРОВЕРКА ВЕРСИИ PYTHON
# =============================================================================

if sys.version_info < (3, 11):
    raise RuntimeError(
        f"twofive требует Python 3.11 или выше. "
        f"Текущая версия: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================

LOGGER_NAMESPACE = "twofive"

_LOG_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _setup_logging() -> None:
    """
    Инициализировать общепакетную конфигурацию логирования.

    Настраивает логгер пакета с:
    - Консольным обработчиком (stderr) для WARNING и выше
    - Ротирующим файловым обработчиком, если задана переменная
      окружения TWOFIVE_LOG_FILE
    - Форматом с временной меткой, уровнем, модулем и сообщением

    Уровень логирования задаётся переменной окружения TWOFIVE_LOG_LEVEL
    (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    Ключ "log_level" в файле конфигурации переопределяет его при
    вызове load_config().

    Функция идемпотентна - повторные вызовы не имеют эффекта.
    """
    log_level_str = os.environ.get("TWOFIVE_LOG_LEVEL", "INFO").upper()
    log_level = _LOG_LEVEL_MAP.get(log_level_str, logging.INFO)

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    if package_logger.handlers:
        return

    package_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt="[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    log_file = os.environ.get("TWOFIVE_LOG_FILE")
    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_path,
                maxBytes=10 * 1024 * 1024,  # 10 МБ
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
        except OSError as e:
            package_logger.warning(
                "Не удалось инициализировать файловое логирование: %s. "
                "Используется только консоль.",
                e,
            )


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер в пространстве имён пакета.

    Логгеры именуются как 'twofive.<module_name>' и наследуют
    обработчики, настроенные в _setup_logging().

    Аргументы:
        module_name: Имя модуля, обычно `__name__`.

    Возвращает:
        Экземпляр logging.Logger.

    Пример:
        >>> logger = get_logger("my_scanner")
        >>> logger.name
        'twofive.my_scanner'
    """
    if module_name == LOGGER_NAMESPACE or module_name.startswith(LOGGER_NAMESPACE + "."):
        full_name = module_name
    elif module_name == "__main__":
        full_name = f"{LOGGER_NAMESPACE}.main"
    else:
        clean_name = module_name.lstrip(".")
        full_name = f"{LOGGER_NAMESPACE}.{clean_name}"

    return logging.getLogger(full_name)


def set_log_level(level: str) -> None:
    """
    Установить уровень логирования пакета во время работы.

    Меняет уровень логгера 'twofive' и файлового обработчика (если он
    настроен). Консольный обработчик остаётся на WARNING.

    Аргументы:
        level: Имя уровня (DEBUG, INFO, WARNING, ERROR, CRITICAL),
               регистр не важен.

    Исключения:
        ValueError: Неизвестное имя уровня.
    """
    try:
        log_level = _LOG_LEVEL_MAP[str(level).strip().upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level!r}") from None

    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    package_logger.setLevel(log_level)
    for handler in package_logger.handlers:
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            handler.setLevel(log_level)


# =============================================================================
# УПРАВЛЕНИЕ КОНФИГУРАЦИЕЙ
# =============================================================================

DEFAULT_CONFIG_FILENAME = "twofive.json"

_DEFAULT_CONFIG: Dict[str, Any] = {
    "symbology": "industrial",
    "digit_count": 1,
    "gray_method": "ntsc",
    "mono_threshold": None,
    "log_level": "INFO",
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Загрузить конфигурацию чтения из JSON-файла или использовать
    настройки по умолчанию.

    Если файл не существует, содержит недопустимый JSON или не является
    JSON-объектом, возвращается конфигурация по умолчанию, а в лог
    пишется предупреждение.

    Ключи конфигурации:
        - symbology: str - "industrial" или "interleaved"
        - digit_count: int - число цифр (для Interleaved - пар цифр)
        - gray_method: str - "basic", "middle_value" или "ntsc"
        - mono_threshold: int | str | None - порог монохрома или имя пресета
        - log_level: str - уровень логирования; если задан в файле,
          сразу применяется через set_log_level()

    Аргументы:
        config_path: Путь к файлу. Если None, ищет 'twofive.json'
                     в текущем каталоге.

    Возвращает:
        Словарь со всеми ключами по умолчанию, переопределёнными
        пользовательскими значениями.
    """
    logger = get_logger(__name__)

    if config_path is None:
        config_path = Path(DEFAULT_CONFIG_FILENAME)

    config = _DEFAULT_CONFIG.copy()

    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                user_config = json.load(f)

            if not isinstance(user_config, dict):
                raise ValueError(
                    f"Файл конфигурации должен содержать JSON-объект, "
                    f"получен {type(user_config).__name__}"
                )

            config.update(user_config)

            if "log_level" in user_config:
                try:
                    set_log_level(user_config["log_level"])
                except ValueError as e:
                    logger.warning(
                        "%s в %s. Уровень логирования не изменён.", e, config_path
                    )
                    config["log_level"] = _DEFAULT_CONFIG["log_level"]

            logger.info("Конфигурация загружена из %s", config_path)
            logger.debug("Конфигурация: %s", config)

        except json.JSONDecodeError as e:
            logger.warning(
                "Не удалось разобрать %s: недопустимый JSON в строке %d, "
                "столбце %d. Используется конфигурация по умолчанию.",
                config_path,
                e.lineno,
                e.colno,
            )
        except OSError as e:
            logger.warning(
                "Не удалось прочитать %s: %s. Используется конфигурация по умолчанию.",
                config_path,
                e,
            )
        except ValueError as e:
            logger.warning(
                "Недопустимый формат конфигурации: %s. "
                "Используется конфигурация по умолчанию.",
                e,
            )
    else:
        logger.info(
            "Файл конфигурации %s не найден. Используется конфигурация по умолчанию.",
            config_path,
        )

    return config


def check_dependencies() -> Dict[str, bool]:
    """
    Проверить, установлены ли зависимости для работы с изображениями.

    Возвращает:
        Словарь, отображающий имена пакетов на статус доступности.
    """
    dependencies: Dict[str, bool] = {}

    try:
        import PIL  # noqa: F401

        dependencies["pillow"] = True
    except ImportError:
        dependencies["pillow"] = False

    return dependencies


_setup_logging()

# =============================================================================
# ПУБЛИЧНЫЙ API
# =============================================================================

from .config import ReaderConfig  # noqa: E402
from .model.enums import GrayScaleMethod, MonoThreshold, Symbology  # noqa: E402
from .model.format_info import (  # noqa: E402
    INDUSTRIAL_FORMAT,
    INTERLEAVED_FORMAT,
    FormatSpec,
)
from .reader import (  # noqa: E402
    BarcodeReader2of5,
    BarcodeReaderError,
    BitmapSampler,
    ImageSampler,
    IndustrialBarcodeReader,
    InterleavedBarcodeReader,
    PixelSampler,
    create_reader,
    read_barcode,
)

__all__ = [
    # Метаданные
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    # Логирование и конфигурация
    "get_logger",
    "set_log_level",
    "load_config",
    "check_dependencies",
    "ReaderConfig",
    # Модель
    "Symbology",
    "GrayScaleMethod",
    "MonoThreshold",
    "FormatSpec",
    "INDUSTRIAL_FORMAT",
    "INTERLEAVED_FORMAT",
    # Чтение
    "PixelSampler",
    "ImageSampler",
    "BitmapSampler",
    "BarcodeReader2of5",
    "BarcodeReaderError",
    "IndustrialBarcodeReader",
    "InterleavedBarcodeReader",
    "create_reader",
    "read_barcode",
]
