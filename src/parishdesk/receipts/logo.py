"""
Logo loading for receipt headers.

A logo is optional decoration: every failure (network, missing file, bad
image data) collapses to ``None`` and the receipt is laid out without it.
"""

import base64
import binascii
import io
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import unquote_to_bytes, urlparse

import httpx
from reportlab.lib.utils import ImageReader

from parishdesk.logging import get_logger

logger = get_logger(__name__)


class LogoUnavailable(Exception):
    """Raised internally when logo bytes cannot be obtained."""


@dataclass(frozen=True)
class LogoImage:
    data: bytes = field(repr=False)
    width_px: int
    height_px: int

    def fit(self, box: float) -> tuple[float, float]:
        """Scale into a square ``box`` keeping the aspect ratio."""
        if self.width_px >= self.height_px:
            return box, box * self.height_px / self.width_px
        return box * self.width_px / self.height_px, box


def _decode_data_url(source: str) -> bytes:
    header, _, payload = source.partition(",")
    if not payload:
        raise LogoUnavailable("empty data URL")
    if header.endswith(";base64"):
        try:
            return base64.b64decode(payload, validate=True)
        except binascii.Error as exc:
            raise LogoUnavailable(f"invalid base64 payload: {exc}") from exc
    return unquote_to_bytes(payload)


async def _download(
    source: str, client: httpx.AsyncClient | None, timeout: float | None
) -> bytes:
    try:
        if client is not None:
            response = await client.get(source, follow_redirects=True)
        else:
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                response = await own_client.get(source, follow_redirects=True)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise LogoUnavailable(str(exc) or exc.__class__.__name__) from exc
    return response.content


async def fetch_logo_bytes(
    source: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> bytes:
    """Read raw logo bytes from an http(s) URL, a data: URL or a local path."""
    if source.startswith("data:"):
        return _decode_data_url(source)

    parsed = urlparse(source)
    if parsed.scheme in ("http", "https"):
        return await _download(source, client, timeout)

    try:
        path = Path(unquote_to_bytes(parsed.path).decode() if parsed.scheme == "file" else source)
        return path.read_bytes()
    except (OSError, ValueError) as exc:  # UnicodeDecodeError, embedded NUL
        raise LogoUnavailable(str(exc)) from exc


def decode_logo(data: bytes) -> LogoImage:
    """Check that ``data`` is an image ReportLab can embed."""
    if not data:
        raise LogoUnavailable("empty image")
    try:
        width, height = ImageReader(io.BytesIO(data)).getSize()
    except Exception as exc:  # ImageReader surfaces any PIL decode error
        raise LogoUnavailable(f"undecodable image: {exc}") from exc
    if width <= 0 or height <= 0:
        raise LogoUnavailable("image has no pixels")
    return LogoImage(data=data, width_px=int(width), height_px=int(height))


async def load_logo(
    source: str | None,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
) -> LogoImage | None:
    """Fetch and decode a logo, returning ``None`` on any failure."""
    if not source:
        return None
    try:
        return decode_logo(await fetch_logo_bytes(source, client=client, timeout=timeout))
    except LogoUnavailable as exc:
        logger.warning("Receipt logo skipped", source=source[:120], reason=str(exc))
        return None


__all__ = ["LogoImage", "LogoUnavailable", "decode_logo", "fetch_logo_bytes", "load_logo"]
