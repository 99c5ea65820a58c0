"""Elevation lookup service backed by a remote HTTP elevation endpoint."""

import asyncio
import json
import logging
import math
import threading
from collections.abc import Callable
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor

import requests

from elevation_lookup.config import Settings
from elevation_lookup.elevation.formatting import format_decimal
from elevation_lookup.elevation.schemas import Coordinate, ElevationResult
from elevation_lookup.exceptions import (
    ElevationLookupError,
    EmptyDataError,
    HttpStatusError,
    MalformedResponseError,
    NetworkError,
)

logger = logging.getLogger(__name__)

LookupOutcome = ElevationResult | ElevationLookupError


def build_request_url(api_url: str, coordinate: Coordinate) -> str:
    """Build the request URL for a coordinate.

    Args:
        api_url: Base endpoint, e.g. 'https://api.airmap.com/elevation/v1/ele/'.
        coordinate: The point to resolve.

    Returns:
        The endpoint with a 'points=<lat>,<lng>' query appended.
    """
    separator = "&" if "?" in api_url else "?"
    latitude = format_decimal(coordinate.latitude)
    longitude = format_decimal(coordinate.longitude)
    return f"{api_url}{separator}points={latitude},{longitude}"


def parse_elevation(body: str) -> float:
    """Extract the elevation from a '{"status":"success","data":[...]}' body.

    Args:
        body: The decoded response body.

    Returns:
        The first element of the data array.

    Raises:
        MalformedResponseError: If the body is not JSON or has an unexpected shape.
        EmptyDataError: If the data array is present but empty.
    """
    try:
        payload = json.loads(body)
    except (ValueError, RecursionError) as exc:
        raise MalformedResponseError(f"Response is not valid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise MalformedResponseError("Response is not a JSON object")

    status = payload.get("status")
    if status != "success":
        raise MalformedResponseError(f"Unexpected response status: {status!r}")

    data = payload.get("data")
    if not isinstance(data, list):
        raise MalformedResponseError("Response has no data array")
    if not data:
        raise EmptyDataError()

    value = data[0]
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponseError(f"Elevation is not a number: {value!r}")
    try:
        elevation = float(value)
    except OverflowError as exc:
        raise MalformedResponseError(f"Elevation out of range: {value!r}") from exc
    if not math.isfinite(elevation):
        raise MalformedResponseError(f"Elevation is not finite: {value!r}")
    return elevation


class LookupHandle:
    """A pending lookup that the caller can wait on or abandon.

    Lookup failures are delivered as ``ElevationLookupError`` values rather
    than raised. Once cancelled, the outcome is discarded even if the
    request already reached the network.
    """

    def __init__(self, coordinate: Coordinate, future: "Future[LookupOutcome]") -> None:
        self.coordinate = coordinate
        self._future = future
        self._lock = threading.Lock()
        self._cancelled = False

    def cancel(self) -> bool:
        """Abandon the lookup.

        Returns:
            False if the lookup had already completed, True otherwise.
        """
        with self._lock:
            if self._cancelled:
                return True
            if self._future.done():
                return False
            self._cancelled = True
        self._future.cancel()
        logger.debug(
            "Lookup cancelled",
            extra={
                "latitude": self.coordinate.latitude,
                "longitude": self.coordinate.longitude,
            },
        )
        return True

    def cancelled(self) -> bool:
        return self._cancelled

    def done(self) -> bool:
        return self._cancelled or self._future.done()

    def result(self, timeout: float | None = None) -> LookupOutcome:
        """Wait for the lookup and return its outcome.

        Raises:
            concurrent.futures.CancelledError: If the handle was cancelled.
            TimeoutError: If the lookup does not finish within ``timeout``.
        """
        if self._cancelled:
            raise CancelledError()
        outcome = self._future.result(timeout)
        if self._cancelled:
            raise CancelledError()
        return outcome

    def add_done_callback(self, fn: Callable[[LookupOutcome], None]) -> None:
        """Call ``fn`` with the outcome once the lookup completes, unless cancelled."""

        def _deliver(future: "Future[LookupOutcome]") -> None:
            if self._cancelled or future.cancelled():
                return
            fn(future.result())

        self._future.add_done_callback(_deliver)


class ElevationLookupService:
    """Service resolving coordinates to elevations through a remote API.

    Each lookup is a single GET with explicit timeouts and no retries.
    Blocking requests run on a thread pool so callers on an event or UI
    thread never wait on the network.
    """

    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        self._settings = settings
        self._session = session if session is not None else requests.Session()
        self._headers: dict[str, str] = {"Accept": "application/json"}
        if settings.api_key:
            self._headers[settings.api_key_header] = settings.api_key
        self._executor = ThreadPoolExecutor(
            max_workers=settings.max_workers,
            thread_name_prefix="elevation-lookup",
        )

    @property
    def executor(self) -> ThreadPoolExecutor:
        """Thread pool executor running the blocking requests."""
        return self._executor

    def build_request_url(self, coordinate: Coordinate) -> str:
        return build_request_url(self._settings.api_url, coordinate)

    def fetch_elevation(self, coordinate: Coordinate) -> ElevationResult:
        """Look up the elevation at a coordinate, blocking until it is known.

        Args:
            coordinate: The point to resolve.

        Returns:
            An ElevationResult for the coordinate.

        Raises:
            NetworkError: If the endpoint cannot be reached.
            HttpStatusError: If the endpoint answers with a non-2xx status.
            MalformedResponseError: If the body cannot be read as an elevation.
            EmptyDataError: If the endpoint returns no elevation values.
        """
        url = self.build_request_url(coordinate)
        logger.debug("Requesting elevation", extra={"url": url})

        try:
            response = self._session.get(
                url,
                headers=self._headers,
                timeout=self._settings.timeout,
            )
        except requests.exceptions.RequestException as exc:
            raise NetworkError(str(exc)) from exc

        if not 200 <= response.status_code < 300:
            raise HttpStatusError(response.status_code)

        try:
            body = response.content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise MalformedResponseError("Response body is not valid UTF-8") from exc

        elevation = parse_elevation(body)
        logger.debug(
            "Received elevation",
            extra={"url": url, "elevation": elevation},
        )
        return ElevationResult(coordinate=coordinate, elevation_meters=elevation)

    def _run_lookup(self, coordinate: Coordinate) -> LookupOutcome:
        try:
            return self.fetch_elevation(coordinate)
        except ElevationLookupError as exc:
            logger.warning(
                "Elevation lookup failed",
                extra={
                    "latitude": coordinate.latitude,
                    "longitude": coordinate.longitude,
                    "error_code": exc.code,
                    "error": str(exc),
                },
            )
            return exc
        except Exception as exc:
            logger.exception(
                "Elevation lookup raised unexpectedly",
                extra={"latitude": coordinate.latitude, "longitude": coordinate.longitude},
            )
            return ElevationLookupError(
                f"Unexpected lookup failure: {exc}", code="UNEXPECTED_ERROR"
            )

    def lookup(self, coordinate: Coordinate) -> LookupHandle:
        """Start a lookup in the background and return a handle to it."""
        future = self._executor.submit(self._run_lookup, coordinate)
        return LookupHandle(coordinate, future)

    async def lookup_async(self, coordinate: Coordinate) -> LookupOutcome:
        """Resolve a coordinate from a coroutine without blocking the event loop.

        Returns:
            The ElevationResult, or the ElevationLookupError describing the failure.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self._executor, self._run_lookup, coordinate)

    def shutdown(self) -> None:
        """Shut down the thread pool executor and close the HTTP session."""
        self._executor.shutdown(wait=False, cancel_futures=True)
        self._session.close()


class LatestLookup:
    """Keeps only the newest lookup alive, e.g. for successive map taps.

    Submitting a coordinate cancels the previous lookup if it is still
    pending, so a stale answer never reaches the caller.
    """

    def __init__(self, service: ElevationLookupService) -> None:
        self._service = service
        self._lock = threading.Lock()
        self._pending: LookupHandle | None = None

    @property
    def pending(self) -> LookupHandle | None:
        return self._pending

    def submit(
        self,
        coordinate: Coordinate,
        on_done: Callable[[LookupOutcome], None] | None = None,
    ) -> LookupHandle:
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
            handle = self._service.lookup(coordinate)
            self._pending = handle
        if on_done is not None:
            handle.add_done_callback(on_done)
        return handle

    def cancel(self) -> None:
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None
