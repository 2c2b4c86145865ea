from __future__ import annotations
import logging
import threading
from typing import Callable, Optional
from urllib.parse import unquote, urlparse

import requests
import urllib3

# Certificate verification is turned off for scan targets (self-signed and
# internal hosts must still be scanned); silence the per-request warning.
urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

DEFAULT_TIMEOUT = 10.0
FILE_SCHEME = "file://"


class FetchError(Exception):
    """A target could not be retrieved; the caller skips it."""


class InvalidTargetError(FetchError):
    pass


class ContentFetcher:
    """Retrieve the raw bytes behind a target.

    ``file://`` targets are read from disk after percent-decoding the path.
    Anything else containing ``http`` is fetched with a GET carrying the
    configured User-Agent, a fixed timeout and TLS verification disabled.
    Each worker thread gets its own ``requests.Session``.
    """

    def __init__(
        self,
        user_agent: str = "Spooky",
        timeout: float = DEFAULT_TIMEOUT,
        *,
        session_factory: Callable[[], requests.Session] = requests.Session,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.user_agent = user_agent
        self.timeout = timeout
        self._session_factory = session_factory
        self._local = threading.local()
        base_logger = logger or logging.getLogger("spooky")
        self.logger = base_logger.getChild(self.__class__.__name__.lower())

    def fetch(self, target: str) -> bytes:
        if "http" not in target and FILE_SCHEME not in target:
            raise InvalidTargetError(
                f"Invalid target {target!r}: each target must contain 'http' or 'file://'"
            )
        if urlparse(target).scheme == "file":
            return self._read_file(target)
        return self._get(target)

    def _session(self) -> requests.Session:
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._session_factory()
            session.headers["User-Agent"] = self.user_agent
            session.verify = False
            self._local.session = session
        return session

    def _read_file(self, target: str) -> bytes:
        path = target[len(FILE_SCHEME):] if target.startswith(FILE_SCHEME) else urlparse(target).path
        # unquote leaves malformed escapes such as "%zz" as they are; such a
        # path then fails at open() below
        path = unquote(path)
        try:
            with open(path, "rb") as f:
                return f.read()
        except OSError as exc:
            raise FetchError(f"Error reading file {path}: {exc}") from exc

    def _get(self, target: str) -> bytes:
        try:
            resp = self._session().get(
                target,
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
                verify=False,
            )
            resp.raise_for_status()
            return resp.content
        except requests.RequestException as exc:
            raise FetchError(f"Error fetching {target}: {exc}") from exc
