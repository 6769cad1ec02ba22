"""
Конвейер обратного резолвинга.

Фидер кладет адреса в ограниченную очередь (parallelism * 10), N воркеров
забирают их и резолвят, репортер раз в интервал печатает счетчик.
"""
import logging
import queue
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterable, List, Optional, TextIO

import dns.exception

logger = logging.getLogger(__name__)

QUEUE_FACTOR = 10

# Маркер закрытия очереди, по одному на воркер
_STOP = object()

Lookup = Callable[[str], List[str]]


class ProgressCounter:
    """Потокобезопасный счетчик обработанных адресов"""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


class LineWriter:
    """Пишет строки в поток целиком, по одной за раз"""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream
        self._lock = threading.Lock()

    def write_line(self, text: str) -> None:
        with self._lock:
            self.stream.write(text + "\n")
            self.stream.flush()

    def write_match(self, ip: str, hostname: str) -> None:
        self.write_line(f"{ip}: {hostname}")


def feed(addresses: Iterable[str], work_queue: queue.Queue, workers: int) -> None:
    """Кладет адреса в очередь по порядку (блокируется, если очередь полна), затем закрывает ее"""
    for ip in addresses:
        work_queue.put(ip)
    for _ in range(workers):
        work_queue.put(_STOP)


def resolve_worker(work_queue: queue.Queue, lookup: Lookup, domain: str,
                   writer: LineWriter, counter: ProgressCounter) -> None:
    """
    Берет адреса из очереди до маркера закрытия.
    Совпадением считается первое имя, содержащее domain.
    Ошибки DNS глотаются, но адрес все равно засчитывается.
    """
    while True:
        ip = work_queue.get()
        if ip is _STOP:
            return

        try:
            names = lookup(ip)
            if names and domain in names[0]:
                writer.write_match(ip, names[0])
        except dns.exception.DNSException as ex:
            logger.debug("PTR для %s не получен: %s: %s", ip, type(ex).__name__, ex)
        finally:
            counter.increment()


def report_progress(counter: ProgressCounter, done: threading.Event,
                    interval: float, console: LineWriter) -> None:
    while not done.wait(interval):
        console.write_line(f"Records processed: {counter.value}")


def run_pipeline(addresses: List[str], out: TextIO, domain: str, parallelism: int,
                 lookup: Lookup, interval: float = 1.0,
                 console: Optional[TextIO] = None) -> int:
    """Прогоняет все адреса через пул воркеров и возвращает число обработанных"""
    if parallelism < 1:
        raise ValueError(f"parallelism must be >= 1, got {parallelism}")

    writer = LineWriter(out)
    if console is None or console is out:
        progress_writer = writer
    else:
        progress_writer = LineWriter(console)

    work_queue = queue.Queue(maxsize=parallelism * QUEUE_FACTOR)
    counter = ProgressCounter()
    done = threading.Event()

    feeder = threading.Thread(target=feed, args=(addresses, work_queue, parallelism),
                              name="rdns-feeder", daemon=True)
    reporter = threading.Thread(target=report_progress, args=(counter, done, interval, progress_writer),
                                name="rdns-progress", daemon=True)

    logger.debug("Старт: адресов=%d воркеров=%d домен=%r", len(addresses), parallelism, domain)
    feeder.start()
    reporter.start()
    try:
        with ThreadPoolExecutor(max_workers=parallelism, thread_name_prefix="rdns-worker") as executor:
            futures = [
                executor.submit(resolve_worker, work_queue, lookup, domain, writer, counter)
                for _ in range(parallelism)
            ]
            for future in as_completed(futures):
                future.result()
    finally:
        done.set()
        reporter.join()

    return counter.value
