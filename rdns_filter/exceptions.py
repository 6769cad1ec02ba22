"""Ошибки подготовки запуска.

Все они фатальные: обработка не начинается, сообщение выводится в консоль.
"""


class RdnsFilterError(Exception):
    """Базовая ошибка rdns-filter."""


class InputFileError(RdnsFilterError):
    """Не удалось открыть входной CSV-файл."""

    def __init__(self, path: str, reason: object) -> None:
        self.path = path
        super().__init__(f"Error opening file: {reason}")


class CSVFormatError(RdnsFilterError):
    """CSV-файл не читается или строки имеют разное число полей."""

    def __init__(self, line_num: int, reason: object) -> None:
        self.line_num = line_num
        super().__init__(f"Error reading CSV: line {line_num}: {reason}")


class OutputFileError(RdnsFilterError):
    """Не удалось создать файл для результатов."""

    def __init__(self, path: str, reason: object) -> None:
        self.path = path
        super().__init__(f"Error opening output file: {reason}")


class ConfigurationError(RdnsFilterError):
    """Некорректные настройки в окружении или .env."""
