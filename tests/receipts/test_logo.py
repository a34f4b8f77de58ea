"""
Tests for logo loading.
"""

import base64

import httpx
import pytest

from parishdesk.receipts.logo import (
    LogoImage,
    LogoUnavailable,
    decode_logo,
    fetch_logo_bytes,
    load_logo,
)

LOGO_URL = "https://logos.example/stpaul.png"


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.unit
class TestDecodeLogo:
    def test_png(self, png_bytes):
        logo = decode_logo(png_bytes)

        assert (logo.width_px, logo.height_px) == (40, 20)

    @pytest.mark.parametrize("data", [b"", b"<html>not found</html>"])
    def test_not_an_image(self, data):
        with pytest.raises(LogoUnavailable):
            decode_logo(data)

    def test_fit_keeps_aspect_ratio(self):
        assert LogoImage(b"x", 40, 20).fit(20) == (20, 10)
        assert LogoImage(b"x", 10, 40).fit(12) == (3, 12)


@pytest.mark.unit
class TestLoadLogo:
    @pytest.mark.asyncio
    async def test_remote_logo(self, png_bytes):
        requested = []

        def handler(request: httpx.Request) -> httpx.Response:
            requested.append(str(request.url))
            return httpx.Response(200, content=png_bytes)

        async with _client(handler) as client:
            logo = await load_logo(LOGO_URL, client=client)

        assert requested == [LOGO_URL]
        assert logo is not None and logo.data == png_bytes

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        async with _client(lambda request: httpx.Response(404)) as client:
            assert await load_logo(LOGO_URL, client=client) is None

    @pytest.mark.asyncio
    async def test_connection_failure(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("unreachable", request=request)

        async with _client(handler) as client:
            assert await load_logo(LOGO_URL, client=client) is None

    @pytest.mark.asyncio
    async def test_non_image_body(self):
        async with _client(lambda request: httpx.Response(200, text="<html/>")) as client:
            assert await load_logo(LOGO_URL, client=client) is None

    @pytest.mark.asyncio
    async def test_data_url(self, png_bytes):
        source = "data:image/png;base64," + base64.b64encode(png_bytes).decode()

        logo = await load_logo(source)

        assert logo is not None and logo.width_px == 40

    @pytest.mark.asyncio
    async def test_bad_data_url(self):
        assert await load_logo("data:image/png;base64,@@@") is None

    @pytest.mark.asyncio
    async def test_local_file(self, tmp_path, png_bytes):
        path = tmp_path / "logo.png"
        path.write_bytes(png_bytes)

        assert await load_logo(str(path)) is not None
        assert await load_logo(path.as_uri()) is not None

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        assert await load_logo(str(tmp_path / "missing.png")) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("source", ["file:///%FF%FE.png", "/tmp/lo\x00go.png"])
    async def test_unusable_path(self, source):
        assert await load_logo(source) is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("source", [None, ""])
    async def test_no_source(self, source):
        assert await load_logo(source) is None

    @pytest.mark.asyncio
    async def test_fetch_bytes_raises_internally(self):
        async with _client(lambda request: httpx.Response(500)) as client:
            with pytest.raises(LogoUnavailable):
                await fetch_logo_bytes(LOGO_URL, client=client)
