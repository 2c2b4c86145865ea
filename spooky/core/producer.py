from __future__ import annotations
import csv
import logging
import threading
from typing import Callable, Iterator, Optional, TextIO

import requests
from tqdm import tqdm

from .fetcher import FetchError

MAJESTIC_MILLION_URL = "https://downloads.majestic.com/majestic_million.csv"
MAJESTIC_MILLION_SIZE = 1_000_000
PROGRESS_INTERVAL_SECONDS = 0.1


def domain_cap(total: int, percent: int) -> Optional[int]:
    """Number of domains to emit for ``percent`` of ``total``; None means no cap."""
    if percent <= 0 or percent >= 100:
        return None
    return (total * percent) // 100


class LineProducer:
    """Targets from a newline-delimited stream, blank lines skipped."""

    def __init__(self, stream: TextIO) -> None:
        self.stream = stream

    def __iter__(self) -> Iterator[str]:
        for line in self.stream:
            line = line.strip()
            if line:
                yield line


class BulkProducer:
    """
    Targets from a remote CSV domain list (domain in the third column).

    The header row is skipped, malformed records are skipped one by one and
    every record with at least three fields becomes ``https://<domain>``.
    Emission stops at ``domain_cap(total, percent)`` when a cap applies. A
    background thread redraws a tqdm bar from ``produced`` every
    ``interval`` seconds; the counter is written only by the producing thread
    and read without a lock, the bar is for display only.
    """

    def __init__(
        self,
        url: str = MAJESTIC_MILLION_URL,
        percent: int = 100,
        total: int = MAJESTIC_MILLION_SIZE,
        *,
        session_factory: Callable[[], requests.Session] = requests.Session,
        timeout: float = 30.0,
        show_progress: bool = True,
        interval: float = PROGRESS_INTERVAL_SECONDS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.url = url
        self.percent = percent
        self.total = total
        self.cap = domain_cap(total, percent)
        self.timeout = timeout
        self.show_progress = bool(show_progress)
        self.interval = interval
        self.produced = 0
        self._session_factory = session_factory
        base_logger = logger or logging.getLogger("spooky")
        self.logger = base_logger.getChild(self.__class__.__name__.lower())

    def _open(self) -> requests.Response:
        try:
            resp = self._session_factory().get(self.url, stream=True, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise FetchError(f"Error downloading domain list {self.url}: {exc}") from exc
        if not resp.encoding:
            resp.encoding = "utf-8"
        return resp

    def __iter__(self) -> Iterator[str]:
        resp = self._open()
        try:
            reader = csv.reader(resp.iter_lines(decode_unicode=True))
            try:
                next(reader)  # header
            except StopIteration:
                return
            except csv.Error as exc:
                self.logger.debug("Malformed header row skipped: %s", exc)

            stop = threading.Event()
            bar = self._start_progress(stop)
            try:
                yield from self._records(reader)
            finally:
                stop.set()
                if bar is not None:
                    self._progress_thread.join()
                    bar.n = self.produced
                    bar.refresh()
                    bar.close()
        finally:
            resp.close()

    def _records(self, reader) -> Iterator[str]:
        while self.cap is None or self.produced < self.cap:
            try:
                record = next(reader)
            except StopIteration:
                return
            except csv.Error as exc:
                self.logger.debug("Skipping malformed record: %s", exc)
                continue
            if len(record) >= 3 and record[2].strip():
                self.produced += 1
                yield "https://" + record[2].strip()

    def _start_progress(self, stop: threading.Event):
        if not self.show_progress:
            return None
        bar = tqdm(total=self.cap or self.total, desc="Domains", unit="domain")

        def redraw() -> None:
            while not stop.wait(self.interval):
                bar.n = self.produced
                bar.refresh()

        self._progress_thread = threading.Thread(target=redraw, name="spooky-progress", daemon=True)
        self._progress_thread.start()
        return bar
