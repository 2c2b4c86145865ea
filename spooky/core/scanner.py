from __future__ import annotations

import logging
import queue
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from ..parsers.html_parser import extract_text
from ..patterns.base import CompiledMatcher
from .fetcher import FILE_SCHEME, ContentFetcher, FetchError, InvalidTargetError
from .loader import compile_matchers
from .models import ScanConfig, Secret
from .store import FindingsStore, Statistics
from .utils import clean_value, decode_content, line_number_of


DEFAULT_LOGGER_NAME = "spooky"
SLOW_SCAN_THRESHOLD_SECONDS = 2.0
DEFAULT_WORKERS = 50

SecretListener = Callable[[str, Secret], None]


def configure_logging(verbose: bool = False, logger_name: str = DEFAULT_LOGGER_NAME) -> logging.Logger:
    """Configure and return the package logger.

    Installs a stream handler only when the logger has none yet, so library
    users who configured logging themselves keep their setup. ``verbose``
    lowers the level from WARNING to INFO.
    """

    logger = logging.getLogger(logger_name)
    level = logging.INFO if verbose else logging.WARNING
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s")
        )
        logger.addHandler(handler)

    return logger


@dataclass
class ScanContext:
    """Everything one run shares between its workers."""
    matchers: List[CompiledMatcher]
    stats: Statistics = field(default_factory=Statistics)
    findings: FindingsStore = field(default_factory=FindingsStore)

    @classmethod
    def for_category(cls, category: str = "all") -> "ScanContext":
        return cls(matchers=compile_matchers(category))


class ScanEngine:
    def __init__(
        self,
        context: ScanContext,
        *,
        on_secret: Optional[SecretListener] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.context = context
        self.on_secret = on_secret
        base_logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.logger = base_logger.getChild(self.__class__.__name__.lower())

    def scan(self, target: str, content: str) -> List[Secret]:
        """Run every matcher over the extracted text of ``content``.

        Counts the target as scanned exactly once (adding the UTF-8 size of
        the extracted text to ``processed_bytes``), records each surviving
        match in the statistics and, as one batch, in the findings store.
        Matches containing ``<`` or ``>`` are markup leftovers and dropped.
        """
        stats = self.context.stats
        if not content:
            stats.increment_scanned(0)
            return []

        clean = extract_text(content)
        stats.increment_scanned(len(clean.encode("utf-8")))

        found: List[Secret] = []
        for matcher in self.context.matchers:
            definition = matcher.definition
            for m in matcher.regex.finditer(clean):
                raw = m.group(0)
                if not raw or "<" in raw or ">" in raw:
                    continue
                value = clean_value(raw)
                line = line_number_of(content, raw, value)
                secret = Secret(
                    category=definition.category,
                    pattern_type=definition.name,
                    value=value,
                    uri=f"{target}:{line}",
                    risk_level=definition.risk_level,
                    impact=definition.impact,
                    line_num=line,
                )
                stats.increment(definition.category)
                found.append(secret)

        # findings are stored before any listener runs
        self.context.findings.extend(target, found)
        if self.on_secret is not None:
            for secret in found:
                self.on_secret(target, secret)
        return found


class WorkerPool:
    """
    Fixed set of workers draining one queue of targets. Each worker fetches,
    decodes and scans a target before taking the next one; a failing target
    is logged and skipped.
    """

    def __init__(
        self,
        engine: ScanEngine,
        fetcher: ContentFetcher,
        workers: int = DEFAULT_WORKERS,
        *,
        logger: Optional[logging.Logger] = None,
        verbose: bool = False,
    ) -> None:
        self.engine = engine
        self.fetcher = fetcher
        self.workers = max(1, int(workers))
        base_logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
        self.logger = base_logger.getChild(self.__class__.__name__.lower())
        self.verbose = verbose
        if verbose:
            self.logger.setLevel(logging.INFO)
        self._slow_log_threshold = SLOW_SCAN_THRESHOLD_SECONDS

    def run(self, targets: Iterable[str]) -> None:
        """Feed ``targets`` to the workers and return once all are processed."""
        channel: "queue.Queue[Optional[str]]" = queue.Queue()
        executor = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="spooky-worker")
        futures = [executor.submit(self._drain, channel) for _ in range(self.workers)]
        try:
            for target in targets:
                target = target.strip()
                if target:
                    channel.put(target)
        except KeyboardInterrupt:
            self.logger.info("Scan interrupted by user; dropping queued targets")
            self._discard_pending(channel)
            raise
        finally:
            for _ in futures:
                channel.put(None)
            executor.shutdown(wait=True)
        for future in futures:
            future.result()

    def _drain(self, channel: "queue.Queue[Optional[str]]") -> None:
        while True:
            target = channel.get()
            if target is None:
                return
            self.process(target)

    @staticmethod
    def _discard_pending(channel: "queue.Queue[Optional[str]]") -> None:
        while True:
            try:
                channel.get_nowait()
            except queue.Empty:
                return

    def process(self, target: str) -> List[Secret]:
        start_time = time.perf_counter()
        try:
            raw = self.fetcher.fetch(target)
        except InvalidTargetError as exc:
            self.logger.warning("%s", exc)
            return []
        except FetchError as exc:
            if target.startswith(FILE_SCHEME):
                self.logger.warning("%s", exc)
            else:
                self.logger.debug("%s", exc)
            return []
        except Exception as exc:
            self._log_unexpected(target, exc)
            return []

        try:
            secrets = self.engine.scan(target, decode_content(raw))
        except Exception as exc:
            self._log_unexpected(target, exc)
            return []

        self._maybe_log_slow_target(target, time.perf_counter() - start_time, len(raw), len(secrets))
        return secrets

    def _log_unexpected(self, target: str, exc: Exception) -> None:
        if self.verbose:
            self.logger.exception("Error scanning %s", target)
        else:
            self.logger.warning("Error scanning %s: %s", target, exc)

    def _maybe_log_slow_target(self, target: str, duration: float, size: int, matches: int) -> None:
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        if duration < self._slow_log_threshold:
            return
        self.logger.debug(
            "Slow scan for %s took %.2fs. size=%s bytes, matches=%d",
            target,
            duration,
            f"{size:,}",
            matches,
        )


def run_scan(
    config: ScanConfig,
    targets: Iterable[str],
    *,
    context: Optional[ScanContext] = None,
    on_secret: Optional[SecretListener] = None,
    fetcher: Optional[ContentFetcher] = None,
    logger: Optional[logging.Logger] = None,
) -> ScanContext:
    """Scan every target with the matchers selected by ``config.category``.

    Opens the streaming output first when ``config`` asks for it; closing it
    (or writing the snapshot) is left to the caller once this returns.
    """
    context = context or ScanContext.for_category(config.category)
    logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)
    if config.output and config.stream_output and not context.findings.streaming:
        context.findings.streaming_init(config.output)

    fetcher = fetcher or ContentFetcher(config.user_agent, config.timeout, logger=logger)
    engine = ScanEngine(context, on_secret=on_secret, logger=logger)
    pool = WorkerPool(engine, fetcher, config.workers, logger=logger, verbose=config.verbose)
    logger.info("Scanning with %d pattern(s) and %d worker(s)", len(context.matchers), pool.workers)
    pool.run(targets)
    return context
