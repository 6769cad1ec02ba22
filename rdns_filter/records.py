"""Загрузка IP-адресов из CSV (адрес - первое поле строки, без заголовка)."""
import csv
import logging
from typing import Iterator, List, TextIO

from rdns_filter.exceptions import CSVFormatError, InputFileError

logger = logging.getLogger(__name__)


def _track_lines(f: TextIO, raw_lines: List[str]) -> Iterator[str]:
    """Отдает строки файла в csv.reader и запоминает сырой текст текущей записи"""
    for line in f:
        raw_lines.append(line)
        yield line


def has_bare_quote(row: List[str], raw_record: str) -> bool:
    """
    Кавычка внутри поля допустима только если поле было целиком в кавычках.
    csv.reader в strict-режиме такие поля (8.8.8.8"x) пропускает, поэтому проверяем сами.
    """
    for value in row:
        if '"' in value and '"' + value.replace('"', '""') + '"' not in raw_record:
            return True
    return False


def read_ip_records(csv_path: str) -> List[str]:
    """
    Читает весь CSV в память и возвращает адреса в порядке следования.

    Правила:
    - Пустые строки пропускаются
    - Все строки должны иметь столько же полей, сколько первая, иначе CSVFormatError
    - Кавычка внутри поля без кавычек - CSVFormatError
    - Строка с пустым первым полем пропускается с предупреждением
    - Кодировка остальных колонок не важна (например cp1251), нужен только IP
    """
    try:
        f = open(csv_path, newline='', encoding='utf-8', errors='surrogateescape')
    except OSError as ex:
        raise InputFileError(csv_path, ex) from ex

    addresses = []
    raw_lines: List[str] = []
    with f:
        reader = csv.reader(_track_lines(f, raw_lines), strict=True)
        fields_per_record = None
        try:
            for row in reader:
                raw_record = "".join(raw_lines)
                raw_lines.clear()
                if not row:
                    continue

                if fields_per_record is None:
                    fields_per_record = len(row)
                elif len(row) != fields_per_record:
                    raise CSVFormatError(reader.line_num, "wrong number of fields")

                if has_bare_quote(row, raw_record):
                    raise CSVFormatError(reader.line_num, 'bare " in non-quoted field')

                ip = row[0].strip()
                if not ip:
                    logger.warning("Строка %d: пустое поле с IP, пропускаем", reader.line_num)
                    continue

                addresses.append(ip)
        except csv.Error as ex:
            raise CSVFormatError(reader.line_num, ex) from ex

    logger.debug("Прочитано адресов из %s: %d", csv_path, len(addresses))
    return addresses
