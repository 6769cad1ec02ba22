#!/usr/bin/env python3
"""
Скрипт читает CSV с IP адресами (адрес в первом поле), делает для каждого обратный
DNS-запрос (PTR) в несколько потоков и выводит только те адреса, имя которых содержит
заданную подстроку домена.

Формат вывода:
<ip>: <hostname>
В консоль раз в секунду выводится число обработанных адресов, в конце - итог.

Настройки резолвера берутся из .env (см. rdns_filter/settings.py)

Запуск:
rdns-filter -in ips.csv -domain google -parall 8
rdns-filter -in ips.csv -out result.txt -domain .ru -parall 32 -timeout 2
"""
import argparse
import contextlib
import functools
import logging
import sys

from rdns_filter.exceptions import OutputFileError, RdnsFilterError
from rdns_filter.pipeline import run_pipeline
from rdns_filter.records import read_ip_records
from rdns_filter.resolver import build_resolver, lookup_addr
from rdns_filter.settings import load_settings

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid float value: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rdns-filter",
        description="Обратный резолвинг IP из CSV с фильтром по домену",
    )
    parser.add_argument("-in", "--in", dest="input", default="", help="Input file name (csv)")
    parser.add_argument("-out", "--out", dest="output", default=None,
                        help="Output file name (по умолчанию stdout)")
    parser.add_argument("-domain", "--domain", default="", help="Domain to lookup (подстрока имени)")
    parser.add_argument("-parall", "--parall", type=positive_int, default=1, help="Maximum parallelism")
    parser.add_argument("-timeout", "--timeout", type=positive_float, default=None,
                        help="Таймаут одного PTR-запроса, сек (перекрывает RDNS_TIMEOUT)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Отладочный лог в stderr")
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def open_output(path):
    """Открывает файл результатов; без пути пишем в stdout (его не закрываем)"""
    if not path or path == "-":
        return contextlib.nullcontext(sys.stdout)
    try:
        return open(path, "w", encoding="utf-8")
    except OSError as ex:
        raise OutputFileError(path, ex) from ex


def main(argv=None) -> None:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    if not args.input:
        print("Input filename is required")
        return

    try:
        settings = load_settings()
        addresses = read_ip_records(args.input)
        output = open_output(args.output)
    except RdnsFilterError as ex:
        print(ex)
        return

    with output as out:
        try:
            resolver = build_resolver(settings.nameservers, args.timeout or settings.timeout)
        except RdnsFilterError as ex:
            print(ex)
            return

        lookup = functools.partial(lookup_addr, resolver=resolver)
        total = run_pipeline(
            addresses,
            out,
            domain=args.domain,
            parallelism=args.parall,
            lookup=lookup,
            interval=settings.progress_interval,
            console=sys.stdout,
        )

    print(f"Total IP addresses processed: {total}")


if __name__ == "__main__":
    main()
