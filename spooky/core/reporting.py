from __future__ import annotations
import json
import sys
import threading
from pathlib import Path
from typing import Dict, List, Optional, TextIO

from colorama import Fore, Style

from .models import ScanConfig, Secret, URLFindings
from .store import FindingsStore

DEFAULT_BULK_OUTPUT = "spooky_results.json"

BANNER = r"""
   ____                    _
  / ___| _ __   ___   ___ | | ___   _
  \___ \| '_ \ / _ \ / _ \| |/ / | | |
   ___) | |_) | (_) | (_) |   <| |_| |
  |____/| .__/ \___/ \___/|_|\_\\__, |
        |_|                     |___/
"""


def write_json(path: Path, findings: List[URLFindings]) -> None:
    Path(path).write_text(json.dumps([f.to_dict() for f in findings], indent=2), encoding="utf-8")


def finalize_output(store: FindingsStore, config: ScanConfig) -> Optional[str]:
    """Close the stream or write the snapshot; return the path written, if any.

    Write errors surface here as ``OSError``, after scanning has finished.
    """
    if store.streaming or (config.output and config.stream_output):
        # a stream that failed mid-run has already been dropped; closing
        # still reports its error
        store.streaming_close()
        return config.output
    if config.output:
        write_json(Path(config.output), store.snapshot())
        return config.output
    return None


class ConsoleReporter:
    def __init__(self, detailed: bool = False, stream: Optional[TextIO] = None) -> None:
        self.detailed = detailed
        self.stream = stream or sys.stdout
        self._lock = threading.Lock()

    def _emit(self, line: str) -> None:
        with self._lock:
            print(line, file=self.stream, flush=True)

    def banner(self, version: str) -> None:
        self._emit(f"{Fore.RED}{BANNER}{Style.RESET_ALL}")
        self._emit(f"{Fore.RED}[{Style.RESET_ALL}API Key Scanner{Fore.RED}] "
                   f"[{Style.RESET_ALL}Version {version}{Fore.RED}]{Style.RESET_ALL}\n")

    def secret_found(self, url: str, secret: Secret) -> None:
        line = f"{Fore.GREEN}[+]{Style.RESET_ALL} Found {secret.category} ({secret.pattern_type})"
        if self.detailed:
            line += f": {secret.value} [{secret.uri}]"
        self._emit(line)

    def summary(self, stats: Dict[str, object], elapsed: float) -> None:
        lines = [
            "",
            f"{Fore.BLUE}[*]{Style.RESET_ALL} Scan completed in {elapsed:.2f} seconds",
            "",
            f"{Fore.BLUE}[*]{Style.RESET_ALL} Scan Statistics:",
            f"    URLs Scanned: {stats['scanned_count']}",
            f"    Secrets Found: {stats['found_count']}",
            f"    Data Processed: {stats['processed_bytes'] / 1024 / 1024:.2f} MB",
        ]
        categories = stats["category_counts"]
        if categories:
            lines.append("")
            lines.append("    Secrets by Category:")
            for name, count in sorted(categories.items()):
                lines.append(f"    - {name}: {count}")
        self._emit("\n".join(lines))

    def results_written(self, path: str) -> None:
        self._emit(f"\n{Fore.BLUE}[*]{Style.RESET_ALL} Results written to: {path}")

    def error(self, message: str) -> None:
        with self._lock:
            print(f"{Fore.RED}[-]{Style.RESET_ALL} {message}", file=sys.stderr, flush=True)
