"""Tests for junction.static: file serving below Settings.root."""

from pathlib import Path

import pytest

from junction.app import App
from junction.config import Settings
from junction.errors import ConfigurationError
from junction.static import StaticFiles
from junction.testing import TestClient


@pytest.fixture
def site(tmp_path: Path) -> Path:
    (tmp_path / "index.html").write_text("<h1>home</h1>")
    (tmp_path / "css").mkdir()
    (tmp_path / "css" / "site.css").write_text("body {}")
    (tmp_path / "config.php").write_text("<?php")
    return tmp_path


def _app(root: Path) -> App:
    settings = Settings(domain="example.org").with_root(root).with_file_extension_filter("php")
    app = App(settings)
    app.add_route("GET", "/api/status", lambda request: "up")
    return app


class TestStaticFiles:
    def test_requires_root(self) -> None:
        with pytest.raises(ConfigurationError, match="settings.root"):
            StaticFiles(Settings())

    async def test_serves_file_with_content_type(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            response = await client.get("/css/site.css")

        assert response.status == 200
        assert response.text == "body {}"
        assert response.content_type == "text/css"

    async def test_explicit_routes_win(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            response = await client.get("/api/status")

        assert response.text == "up"

    async def test_blocked_extension_is_403(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            response = await client.get("/config.php")

        assert response.status == 403

    async def test_missing_page_redirects_to_fallback(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            no_extension = await client.get("/about")
            html = await client.get("/about.html")

        for response in (no_extension, html):
            assert response.status == 307
            assert response.header("location") == "https://example.org:443/404"

    async def test_missing_asset_is_404(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            response = await client.get("/img/logo.png")

        assert response.status == 404
        assert response.body == b""

    async def test_directory_is_treated_as_missing(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            response = await client.get("/css")

        assert response.status == 307

    async def test_root_path_redirects_to_fallback(self, site: Path) -> None:
        async with TestClient(_app(site)) as client:
            response = await client.get("/")

        assert response.status == 307
        assert response.header("location") == "https://example.org:443/404"

    async def test_traversal_outside_root_is_403(self, site: Path) -> None:
        (site.parent / "secret.txt").write_text("secret")
        async with TestClient(_app(site)) as client:
            response = await client.get("/css/../../secret.txt")

        assert response.status == 403

    async def test_no_static_route_without_root(self) -> None:
        async with TestClient(App()) as client:
            response = await client.get("/index.html")

        assert response.status == 404
