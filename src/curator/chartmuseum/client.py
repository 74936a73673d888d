"""
curator.chartmuseum.client — ChartMuseum API client.

Builds requests relative to a fixed base URL and decodes the
JSON envelope every ChartMuseum endpoint answers with:

    {"saved": true}
    {"deleted": true}
    {"healthy": true}
    {"error": "file already exists"}

Transport is a requests.Session; pass your own to configure
auth, TLS or proxies.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import IO, Any
from urllib.parse import urljoin, urlsplit, urlunsplit

import requests

from curator.chartmuseum.context import Context


logger = logging.getLogger(__name__)

USER_AGENT = "curator"
MEDIA_TYPE = "application/vnd.chartmuseum.v0+json"


class ChartMuseumError(Exception):
    """Base error. `response` is set when the server answered."""

    def __init__(self, message: str, response: Response | None = None):
        super().__init__(message)
        self.response = response


class APIError(ChartMuseumError):
    """Non-2xx answer. The message is the envelope's `error` field."""


@dataclass
class Response:
    """Decoded ChartMuseum response envelope."""
    http: requests.Response
    message: str = ""
    error: str = ""
    saved: bool = False
    deleted: bool = False
    healthy: bool = False

    @property
    def status_code(self) -> int:
        return self.http.status_code

    @property
    def headers(self):
        return self.http.headers

    def _decode(self, payload: dict[str, Any]) -> None:
        for key in ("message", "error"):
            value = payload.get(key)
            if isinstance(value, str):
                setattr(self, key, value)
        for key in ("saved", "deleted", "healthy"):
            value = payload.get(key)
            if isinstance(value, bool):
                setattr(self, key, value)


class Client:
    """Manages communication with the ChartMuseum API.

    base_url always ends with a slash once normalized, so relative
    paths like "api/charts" resolve below it.
    """

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
    ):
        if not base_url or not base_url.strip():
            raise ChartMuseumError(
                "ChartMuseum API - base URL can not be blank"
            )
        self.base_url = _normalize_base_url(base_url.strip())
        self.session = session if session is not None else requests.Session()
        self.user_agent = USER_AGENT

        # Imported here: charts.py depends on this module
        from curator.chartmuseum.charts import ChartService
        self.charts = ChartService(self)

    def _resolve(self, url: str) -> str:
        if url.startswith("/"):
            raise ChartMuseumError(
                f"Relative URL must not start with a slash: {url!r}"
            )
        return urljoin(self.base_url, url)

    def new_request(
        self,
        method: str,
        url: str,
        body: Any = None,
    ) -> requests.Request:
        """Create an API request.

        url is resolved relative to base_url. If body is given it is
        JSON encoded and sent as application/json.
        """
        headers = {"Accept": MEDIA_TYPE}
        data = None
        if body is not None:
            # json.dumps never HTML-escapes <, > or &
            data = json.dumps(body).encode()
            headers["Content-Type"] = "application/json"
        if self.user_agent:
            headers["User-Agent"] = self.user_agent

        return requests.Request(
            method, self._resolve(url), headers=headers, data=data,
        )

    def new_upload_request(
        self,
        url: str,
        stream: IO[bytes],
        size: int,
        media_type: str,
    ) -> requests.Request:
        """Create a POST request streaming `stream` as the body."""
        headers = {
            "Content-Length": str(size),
            "Content-Type": media_type,
            "User-Agent": self.user_agent,
        }
        # requests frames an empty stream as chunked; send no body instead
        data = stream if size else b""
        return requests.Request(
            "POST", self._resolve(url), headers=headers, data=data,
        )

    def do(self, ctx: Context, request: requests.Request) -> Response:
        """Send an API request and return the decoded response.

        Raises the context's error when it was cancelled or timed out,
        the requests exception on other transport failures and
        APIError on a non-2xx status.
        """
        err = ctx.err()
        if err is not None:
            raise err

        prepared = self.session.prepare_request(request)
        # Proxies / CA bundle from the environment, like Session.request
        settings = self.session.merge_environment_settings(
            prepared.url, {}, None, None, None,
        )
        logger.debug("%s %s", prepared.method, prepared.url)

        try:
            resp = self.session.send(
                prepared, timeout=ctx.remaining(), **settings,
            )
        except requests.RequestException as e:
            # A cancelled context explains the failure better
            err = ctx.err()
            if err is not None:
                raise err from e
            raise

        return parse_response(resp)

    def health(self, ctx: Context) -> Response:
        """GET /health."""
        req = self.new_request("GET", "health")
        return self.do(ctx, req)


def parse_response(r: requests.Response) -> Response:
    response = Response(http=r)
    try:
        data = r.content
    finally:
        r.close()

    if data:
        try:
            payload = json.loads(data)
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            response._decode(payload)

    logger.debug("%s %s -> %d", r.request.method if r.request else "",
                 r.url, r.status_code)

    if 200 <= r.status_code <= 299:
        return response
    raise APIError(response.error, response=response)


def _normalize_base_url(base_url: str) -> str:
    try:
        parts = urlsplit(base_url)
    except ValueError as e:
        raise ChartMuseumError(f"Invalid base URL {base_url!r}: {e}") from e
    if not parts.scheme or not parts.netloc:
        raise ChartMuseumError(
            f"Base URL must be absolute (scheme://host/...): {base_url!r}"
        )
    path = parts.path
    if not path.endswith("/"):
        path += "/"
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, ""))
