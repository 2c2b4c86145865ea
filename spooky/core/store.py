from __future__ import annotations
import json
import threading
from typing import Dict, Iterable, List, Optional, Set, TextIO

from .models import Secret, URLFindings


class Statistics:
    """Run counters shared by every worker; one lock guards all of them."""

    def __init__(self) -> None:
        self.scanned_count = 0
        self.found_count = 0
        self.processed_bytes = 0
        self.category_counts: Dict[str, int] = {}
        self._lock = threading.Lock()

    def increment_scanned(self, nbytes: int) -> None:
        with self._lock:
            self.scanned_count += 1
            self.processed_bytes += nbytes

    def increment(self, category: str) -> None:
        with self._lock:
            self.found_count += 1
            self.category_counts[category] = self.category_counts.get(category, 0) + 1

    def snapshot(self) -> Dict[str, object]:
        with self._lock:
            return {
                "scanned_count": self.scanned_count,
                "found_count": self.found_count,
                "processed_bytes": self.processed_bytes,
                "category_counts": dict(self.category_counts),
            }


class FindingsStore:
    """
    URL-keyed findings, safe to share between workers.

    With a stream open (``streaming_init``) findings are also written to the
    output file as a JSON array while the scan runs. The first batch recorded
    for a URL is written with the URL's full secret list. A later batch for a
    URL that was already written becomes one more ``{"url", "secrets"}``
    element holding only the new secrets, so merging the elements of the file
    by URL gives the same findings as ``snapshot()``.
    """

    def __init__(self) -> None:
        self._sites: Dict[str, URLFindings] = {}
        self._lock = threading.Lock()
        self._stream: Optional[TextIO] = None
        self._streamed: Set[str] = set()
        self._first_entry = True
        self._stream_error: Optional[OSError] = None

    def add(self, url: str, secret: Secret) -> None:
        self.extend(url, [secret])

    def extend(self, url: str, secrets: Iterable[Secret]) -> None:
        batch = list(secrets)
        if not batch:
            return
        with self._lock:
            entry = self._sites.get(url)
            if entry is None:
                entry = self._sites[url] = URLFindings(url=url)
            entry.secrets.extend(batch)
            if self._stream is None:
                return
            if url in self._streamed:
                self._write_entry(URLFindings(url=url, secrets=batch))
            else:
                self._write_entry(entry)
                self._streamed.add(url)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sites)

    def snapshot(self) -> List[URLFindings]:
        with self._lock:
            return [URLFindings(url=f.url, secrets=list(f.secrets)) for f in self._sites.values()]

    # Streaming output
    @property
    def streaming(self) -> bool:
        return self._stream is not None

    def streaming_init(self, path: str) -> None:
        with self._lock:
            self._stream = open(path, "w", encoding="utf-8")
            self._stream.write("[\n")
            self._first_entry = True
            self._streamed.clear()
            self._stream_error = None

    def streaming_close(self) -> None:
        """Terminate the JSON array and close the file.

        Raises the first write error met while streaming, if there was one.
        """
        with self._lock:
            stream, self._stream = self._stream, None
            error, self._stream_error = self._stream_error, None
            if stream is not None:
                try:
                    stream.write("\n]\n")
                finally:
                    stream.close()
        if error is not None:
            raise error

    def _write_entry(self, entry: URLFindings) -> None:
        # caller holds the lock
        data = json.dumps(entry.to_dict(), indent=2)
        try:
            if not self._first_entry:
                self._stream.write(",\n")
            self._stream.write(data)
            self._stream.flush()
            self._first_entry = False
        except OSError as exc:
            self._stream_error = exc
            try:
                self._stream.close()
            except OSError:
                pass
            self._stream = None
