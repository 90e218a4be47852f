"""HTTP GET with per-attempt timeouts, jittered exponential backoff and a run deadline."""

from __future__ import annotations

import enum
import logging
from typing import Any, Callable, Protocol

import httpx
from tenacity import (
    RetryCallState,
    Retrying,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_never,
    wait_exponential,
    wait_random,
)

from helm_dependency_fetch.config.settings import settings
from helm_dependency_fetch.core.deadline import Deadline, DeadlineExceeded
from helm_dependency_fetch.core.errors import FetchError, FetchStatusError, FetchTimeoutError
from helm_dependency_fetch.models.repo import Credentials

logger = logging.getLogger(__name__)


class FetchPhase(enum.Enum):
    ATTEMPTING = "attempting"
    BACKING_OFF = "backing-off"
    SUCCEEDED = "succeeded"
    EXHAUSTED = "exhausted-by-deadline"


TransitionCallback = Callable[[FetchPhase, str], None]


class Getter(Protocol):
    """Anything that can GET a URL within a deadline."""

    def get(self, url: str, credentials: Credentials, deadline: Deadline) -> httpx.Response: ...


class TransientStatusError(Exception):
    """A status code the server is expected to recover from."""

    def __init__(self, response: httpx.Response) -> None:
        super().__init__(f"{response.status_code} {response.reason_phrase}".strip())
        self.response = response


class NetworkGetter:
    """Production Getter backed by an httpx client.

    Transport errors (DNS, refused, reset, timeouts) and the statuses in
    ``settings.retry_statuses`` are retried without an attempt limit; only
    the deadline stops the loop. Other non-2xx statuses raise
    FetchStatusError straight away, and any other httpx failure (including
    an unsupported scheme such as ``oci://``) raises FetchError.
    """

    def __init__(
        self,
        transport: httpx.BaseTransport | None = None,
        retry_statuses: frozenset[int] | None = None,
        on_transition: TransitionCallback | None = None,
    ) -> None:
        self._transport = transport
        self.retry_statuses = settings.retry_statuses if retry_statuses is None else retry_statuses
        self._on_transition = on_transition
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(transport=self._transport, follow_redirects=True)
        return self._client

    def __enter__(self) -> NetworkGetter:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
            self._client = None

    def get(self, url: str, credentials: Credentials, deadline: Deadline) -> httpx.Response:
        auth = httpx.BasicAuth(credentials.username, credentials.password) if credentials else None
        last_error: list[BaseException] = []

        def before_sleep(retry_state: RetryCallState) -> None:
            exc = retry_state.outcome.exception() if retry_state.outcome else None
            if exc is not None:
                last_error[:] = [exc]
            delay = retry_state.next_action.sleep if retry_state.next_action else 0.0
            logger.warning(
                "GET %s failed (attempt %d: %s), retrying in %.1fs",
                url, retry_state.attempt_number, exc, delay,
            )
            self._transition(FetchPhase.BACKING_OFF, url)

        retrying = Retrying(
            retry=(
                retry_if_exception_type((httpx.TransportError, TransientStatusError))
                & retry_if_not_exception_type(httpx.UnsupportedProtocol)
            ),
            wait=wait_exponential(
                multiplier=settings.backoff_min,
                exp_base=settings.backoff_factor,
                min=settings.backoff_min,
                max=settings.backoff_max,
            ) + wait_random(0, settings.backoff_jitter),
            stop=stop_never,
            sleep=deadline.wait,
            before_sleep=before_sleep,
            reraise=True,
        )

        try:
            response = retrying(self._attempt, url, auth, deadline)
        except DeadlineExceeded as exc:
            self._transition(FetchPhase.EXHAUSTED, url)
            detail = f" (last error: {last_error[0]})" if last_error else ""
            raise FetchTimeoutError(
                f"timed out performing http request to {url}{detail}", url=url,
            ) from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            # redirect loops, undecodable bodies, bad or unsupported URLs
            raise FetchError(f"GET {url} failed: {exc}", url=url) from exc

        self._transition(FetchPhase.SUCCEEDED, url)
        return response

    def _attempt(self, url: str, auth: httpx.Auth | None, deadline: Deadline) -> httpx.Response:
        deadline.check()
        self._transition(FetchPhase.ATTEMPTING, url)
        logger.debug("GET %s", url)
        response = self.client.get(url, auth=auth, timeout=self._attempt_timeout(deadline))

        if response.status_code in self.retry_statuses:
            raise TransientStatusError(response)
        if not response.is_success:
            raise FetchStatusError(url, response.status_code, response.reason_phrase)
        return response

    @staticmethod
    def _attempt_timeout(deadline: Deadline) -> httpx.Timeout:
        remaining = deadline.remaining()

        def cap(value: float) -> float:
            return value if remaining is None else min(value, remaining)

        return httpx.Timeout(
            connect=cap(settings.connect_timeout),
            read=cap(settings.read_timeout),
            write=cap(settings.write_timeout),
            pool=cap(settings.pool_timeout),
        )

    def _transition(self, phase: FetchPhase, url: str) -> None:
        if self._on_transition:
            self._on_transition(phase, url)
