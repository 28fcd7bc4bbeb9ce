"""
Bounded-concurrency dead-link checker for the catalog's URLs.

Probes are HTTP HEAD requests multiplexed on a single asyncio event loop.
At most ``concurrency`` of them are in flight; each completion admits the
next work item, so the pool stays saturated until the worklist drains.
"""

import asyncio
import logging
import re
import sys
from typing import Dict, Iterable, List, Optional, TextIO
from urllib.parse import quote

import httpx

from arf_tools.config import MAX_REDIRECTS, USER_AGENT, CheckerSettings
from arf_tools.exceptions import InvalidUrlError
from arf_tools.tree import CheckResult, DeadLink, LinkCheckReport, ProbeStatus, WorkItem

# Characters that show up in raw catalog URLs but are not valid in a request path
UNSAFE_URL_CHARS = re.compile(r'[ "<>\\^`{|}\[\]]')

# Servers that reject HEAD or unknown agents while the page is still there
TOLERATED_STATUS_CODES = {403, 405}

MAX_PORT = 65535


def sanitize_url(raw_url: str) -> httpx.URL:
    """
    Clean up a catalog URL and turn it into a request target.

    Whitespace is trimmed and unsafe characters are percent-encoded. Any
    scheme other than https is requested over plain http; the fragment is
    dropped.

    Args:
        raw_url: URL as written in the catalog

    Returns:
        The URL to send the HEAD request to

    Raises:
        InvalidUrlError: If the URL cannot be parsed, has no scheme or host,
            or has a malformed host or port
    """
    cleaned = UNSAFE_URL_CHARS.sub(lambda m: quote(m.group(0), safe=""), str(raw_url).strip())

    try:
        url = httpx.URL(cleaned)
    except httpx.InvalidURL as e:
        raise InvalidUrlError(raw_url, str(e) or "Invalid URL") from e

    if not url.scheme or not url.host:
        raise InvalidUrlError(raw_url, f"Invalid URL: {cleaned}")

    # Encoded characters are only legal in the path and query
    if "%" in url.host:
        raise InvalidUrlError(raw_url, f"Invalid host: {url.host}")

    if url.port is not None and not 0 <= url.port <= MAX_PORT:
        raise InvalidUrlError(raw_url, f"Invalid port: {url.port}")

    scheme = "https" if url.scheme == "https" else "http"
    return url.copy_with(scheme=scheme, fragment=None)


def classify_status(status_code: int) -> CheckResult:
    """
    Classify an HTTP status code.

    Args:
        status_code: Status code of the HEAD response

    Returns:
        ``alive`` below 400 and for 403/405, ``dead`` otherwise
    """
    if status_code < 400 or status_code in TOLERATED_STATUS_CODES:
        return CheckResult(ProbeStatus.ALIVE, code=status_code)
    return CheckResult(ProbeStatus.DEAD, code=status_code)


def _error_message(error: Exception) -> str:
    return str(error) or type(error).__name__


async def probe_url(
    client: httpx.AsyncClient,
    raw_url: str,
    timeout: float,
    user_agent: str = USER_AGENT,
    follow_redirects: bool = False,
) -> CheckResult:
    """
    Send one HEAD request and classify the outcome.

    Every path returns exactly one result; probe failures are never raised.

    Args:
        client: HTTP client to send the request with
        raw_url: URL as written in the catalog
        timeout: Deadline for the whole request, in seconds
        user_agent: User-Agent header value
        follow_redirects: Whether redirect responses are followed

    Returns:
        Classification of the URL
    """
    try:
        url = sanitize_url(raw_url)
    except InvalidUrlError as e:
        return CheckResult(ProbeStatus.INVALID_URL, error=e.reason)

    try:
        # wait_for cancels the request on expiry, which closes its connection
        response = await asyncio.wait_for(
            client.head(
                url,
                headers={"User-Agent": user_agent},
                follow_redirects=follow_redirects,
                timeout=timeout,
            ),
            timeout,
        )
    except (asyncio.TimeoutError, httpx.TimeoutException):
        return CheckResult(ProbeStatus.TIMEOUT)
    except Exception as e:
        # httpx errors, plus socket-level failures httpx does not wrap (OverflowError)
        return CheckResult(ProbeStatus.ERROR, error=_error_message(e))

    return classify_status(response.status_code)


class LinkChecker:
    """
    Probe engine that drains a worklist with a fixed number of in-flight probes.

    All scheduling state lives on the instance and is only touched from the
    event loop, so no lock is needed.
    """

    def __init__(
        self,
        settings: Optional[CheckerSettings] = None,
        client: Optional[httpx.AsyncClient] = None,
        progress: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the link checker.

        Args:
            settings: Concurrency, timeout and request settings
            client: HTTP client to reuse; one is created per run when omitted
            progress: Stream for progress markers, defaults to stdout
            logger: Logger instance
        """
        self.settings = settings or CheckerSettings()
        self.client = client
        self.progress = progress if progress is not None else sys.stdout
        self.logger = logger or logging.getLogger(__name__)

        self.items: List[WorkItem] = []
        self.cursor = 0
        self.in_flight = 0
        self.checked = 0
        self.peak_in_flight = 0
        self.dead_links: List[DeadLink] = []

    def check(self, items: Iterable[WorkItem]) -> LinkCheckReport:
        """Run the checker to completion on a fresh event loop."""
        return asyncio.run(self.run(items))

    async def run(self, items: Iterable[WorkItem]) -> LinkCheckReport:
        """
        Probe every work item and collect the ones that are not alive.

        Args:
            items: Work items in traversal order

        Returns:
            Report of the finished run
        """
        self._reset(items)
        self.logger.info(
            f"Starting checks of {len(self.items)} URLs with concurrency {self.settings.concurrency}"
        )

        client = self.client or self._build_client()
        pending: Dict[asyncio.Task, WorkItem] = {}

        try:
            self._admit(client, pending)

            while pending:
                done, _ = await asyncio.wait(set(pending), return_when=asyncio.FIRST_COMPLETED)

                for task in done:
                    item = pending.pop(task)
                    self._record(item, task.result())

                self._admit(client, pending)
        finally:
            for task in pending:
                task.cancel()
            if self.client is None:
                await client.aclose()

        self.logger.info(
            f"Check complete: {self.checked}/{len(self.items)} checked, "
            f"{len(self.dead_links)} dead or suspect"
        )

        return LinkCheckReport(
            total=len(self.items),
            checked=self.checked,
            peak_in_flight=self.peak_in_flight,
            dead_links=list(self.dead_links),
        )

    def _reset(self, items: Iterable[WorkItem]) -> None:
        self.items = list(items)
        self.cursor = 0
        self.in_flight = 0
        self.checked = 0
        self.peak_in_flight = 0
        self.dead_links = []

    def _build_client(self) -> httpx.AsyncClient:
        concurrency = self.settings.concurrency
        return httpx.AsyncClient(
            timeout=self.settings.timeout_seconds,
            follow_redirects=self.settings.follow_redirects,
            max_redirects=MAX_REDIRECTS,
            limits=httpx.Limits(max_connections=concurrency, max_keepalive_connections=concurrency),
        )

    def _admit(self, client: httpx.AsyncClient, pending: Dict[asyncio.Task, WorkItem]) -> None:
        """Start probes while there is pool capacity and work left."""
        while self.in_flight < self.settings.concurrency and self.cursor < len(self.items):
            item = self.items[self.cursor]
            self.cursor += 1
            self.in_flight += 1
            self.peak_in_flight = max(self.peak_in_flight, self.in_flight)

            task = asyncio.create_task(probe_url(
                client,
                item.url,
                self.settings.timeout_seconds,
                user_agent=self.settings.user_agent,
                follow_redirects=self.settings.follow_redirects,
            ))
            pending[task] = item

    def _record(self, item: WorkItem, result: CheckResult) -> None:
        self.in_flight -= 1
        self.checked += 1

        self.logger.debug(
            f"{result.status.value}: {item.url}",
            extra={"url": item.url, "status": result.status.value, "code": result.code},
        )

        if not result.is_alive:
            self.progress.write("x")
            self.dead_links.append(DeadLink.from_result(item, result))

        if self.checked % self.settings.progress_every == 0:
            self.progress.write(f" {self.checked}/{len(self.items)}\r")

        self.progress.flush()
