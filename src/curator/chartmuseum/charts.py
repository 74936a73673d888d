"""
curator.chartmuseum.charts — Chart upload / delete.

API paths, depending on scope:

    POST   api/charts                               (no scope)
    POST   api/{repo}/charts                        (repo)
    POST   api/{org}/{repo}/charts                  (org + repo)
    DELETE api/[{org}/][{repo}/]charts/{name}/{version}
"""

from __future__ import annotations

import logging
import os
import stat
from dataclasses import dataclass
from typing import IO, TYPE_CHECKING

import requests

from curator.chartmuseum.client import APIError, ChartMuseumError, Response
from curator.chartmuseum.context import Context, ContextError

if TYPE_CHECKING:
    from curator.chartmuseum.client import Client


logger = logging.getLogger(__name__)

SNIFF_LEN = 512
DEFAULT_CONTENT_TYPE = "application/octet-stream"


class ValidationError(ChartMuseumError):
    pass


@dataclass(frozen=True)
class ChartInfo:
    """A chart's name and version, optionally scoped to org/repo."""
    name: str
    version: str
    org: str | None = None
    repo: str | None = None

    def __str__(self) -> str:
        s = f"{self.name}-{self.version}"
        if self.org:
            return f"{self.org}/{self.repo or ''}/{s}"
        if self.repo:
            return f"{self.repo}/{s}"
        return s

    def scope(self) -> str:
        """Path prefix below api/: '', 'repo/' or 'org/repo/'."""
        if self.org:
            if not self.repo:
                raise ValidationError("Repo required if Org is provided")
            return f"{self.org}/{self.repo}/"
        if self.repo:
            return f"{self.repo}/"
        return ""


class ChartService:
    """Chart manipulation methods of the ChartMuseum API."""

    def __init__(self, client: Client):
        self.client = client

    def upload_chart(
        self,
        ctx: Context,
        info: ChartInfo,
        file: IO[bytes],
    ) -> Response:
        """Upload a packaged chart (an open binary file)."""
        url = f"api/{info.scope()}charts"
        return self._upload(ctx, url, file)

    def delete_chart(self, ctx: Context, info: ChartInfo) -> Response:
        """Delete a chart version."""
        url = f"api/{info.scope()}charts/{info.name}/{info.version}"
        return self._delete(ctx, url)

    def _upload(self, ctx: Context, url: str, file: IO[bytes]) -> Response:
        try:
            st = os.fstat(file.fileno())
        except (OSError, AttributeError, ValueError) as e:
            raise ChartMuseumError(f"Unable to access file: {e}") from e
        if stat.S_ISDIR(st.st_mode):
            raise ChartMuseumError("Chart to upload can't be a directory")

        media_type = detect_content_type(file)
        logger.debug("Uploading %d bytes (%s) to %s",
                     st.st_size, media_type, url)

        try:
            req = self.client.new_upload_request(
                url, file, st.st_size, media_type,
            )
        except ChartMuseumError as e:
            raise ChartMuseumError(
                f"Failed creating upload request: {e}"
            ) from e

        return self._do(ctx, req, "upload")

    def _delete(self, ctx: Context, url: str) -> Response:
        try:
            req = self.client.new_request("DELETE", url)
        except ChartMuseumError as e:
            raise ChartMuseumError(
                f"Failed creating delete request: {e}"
            ) from e

        return self._do(ctx, req, "delete")

    def _do(self, ctx: Context, req: requests.Request, op: str) -> Response:
        try:
            return self.client.do(ctx, req)
        except APIError as e:
            raise ChartMuseumError(
                f"Failed to do {op} request: {e}", response=e.response,
            ) from e
        except (requests.RequestException, ContextError) as e:
            raise ChartMuseumError(f"Failed to do {op} request: {e}") from e


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CONTENT SNIFFING
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
_SIGNATURES = [
    (b"%PDF-", "application/pdf"),
    (b"\x1f\x8b\x08", "application/x-gzip"),
    (b"PK\x03\x04", "application/zip"),
    (b"BZh", "application/x-bzip2"),
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xef\xbb\xbf", "text/plain; charset=utf-8"),
    (b"\xfe\xff", "text/plain; charset=utf-16be"),
    (b"\xff\xfe", "text/plain; charset=utf-16le"),
]

# Control bytes that never show up in text
_BINARY_BYTES = frozenset(
    list(range(0x00, 0x09)) + [0x0B] + list(range(0x0E, 0x1B))
    + list(range(0x1C, 0x20))
)


def sniff(data: bytes) -> str:
    """Guess a MIME type from the leading bytes of some content."""
    data = data[:SNIFF_LEN]
    if not data:
        return "text/plain; charset=utf-8"
    for magic, media_type in _SIGNATURES:
        if data.startswith(magic):
            return media_type
    if any(b in _BINARY_BYTES for b in data):
        return DEFAULT_CONTENT_TYPE
    return "text/plain; charset=utf-8"


def detect_content_type(file: IO[bytes]) -> str:
    """Sniff the file's content type from its first 512 bytes.

    The read position is reset to the start afterwards. Falls back
    to application/octet-stream when nothing can be read.
    """
    try:
        head = file.read(SNIFF_LEN)
    except OSError:
        return DEFAULT_CONTENT_TYPE
    finally:
        file.seek(0)

    if not head:
        return DEFAULT_CONTENT_TYPE
    return sniff(head)
