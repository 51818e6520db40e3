"""Tests for the live form extractor (no browser is launched)."""

import asyncio
import json

import pytest
from playwright.async_api import Error as PlaywrightError

from udyam_form.config import UdyamFormConfig
from udyam_form.errors import ExtractionUnavailable
from udyam_form.extraction import scraper
from udyam_form.extraction.scraper import FormExtractor
from udyam_form.schema.provider import SchemaProvider
from udyam_form.schema.store import schema_cache_path

PAGE = """
<html><body><form>
  <div><label for="pan">PAN Number</label><input id="pan" name="ctl00$txtPan"></div>
  <div><label for="pin">PIN Code</label><input id="pin" name="ctl00$txtPin"></div>
</form></body></html>
"""


class FakePage:
    """Records goto calls and fails the first ``failures`` of them."""

    def __init__(self, failures: int):
        self.failures = failures
        self.calls: list[str] = []

    async def goto(self, url, wait_until=None, timeout=None):
        self.calls.append(wait_until)
        if len(self.calls) <= self.failures:
            raise PlaywrightError("net::ERR_TIMED_OUT")


class MissingBrowser:
    """Stands in for async_playwright() when no Chromium binary is installed."""

    def __init__(self):
        self.chromium = self

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        return False

    async def launch(self, **kwargs):
        raise PlaywrightError("BrowserType.launch: Executable doesn't exist")


@pytest.fixture
def extractor(tmp_path):
    config = UdyamFormConfig(navigation_retry_delay=0, schema_cache_dir=str(tmp_path))
    return FormExtractor(config)


class TestNavigation:
    """Tests for the single navigation retry."""

    def test_first_attempt_succeeds(self, extractor):
        page = FakePage(failures=0)
        asyncio.run(extractor._navigate(page))
        assert page.calls == ["networkidle"]

    def test_retry_with_lighter_wait(self, extractor):
        page = FakePage(failures=1)
        asyncio.run(extractor._navigate(page))
        assert page.calls == ["networkidle", "domcontentloaded"]

    def test_second_failure_raises(self, extractor):
        page = FakePage(failures=2)
        with pytest.raises(ExtractionUnavailable):
            asyncio.run(extractor._navigate(page))
        assert len(page.calls) == 2


class TestExtractToCache:
    """Tests for writing extracted schemas."""

    def test_from_html(self, extractor, tmp_path):
        schema, path = asyncio.run(extractor.extract_to_cache(2, html=PAGE))
        assert path == schema_cache_path(2, tmp_path)
        document = json.loads(path.read_text(encoding="utf-8"))
        assert document["step"] == 2
        assert [f["label"] for f in document["fields"]] == ["PAN Number", "PIN Code"]
        assert schema.fields[0].validation.pattern == r"^[A-Z]{5}[0-9]{4}[A-Z]{1}$"

    def test_cache_dir_override(self, extractor, tmp_path):
        target = tmp_path / "other"
        _, path = asyncio.run(extractor.extract_to_cache(1, html=PAGE, cache_dir=target))
        assert path.parent == target

    def test_live_page(self, extractor, monkeypatch):
        async def fake_fetch():
            return PAGE

        monkeypatch.setattr(extractor, "fetch_html", fake_fetch)
        schema = asyncio.run(extractor.produce_schema(1))
        assert len(schema.fields) == 2

    def test_unavailable_page_writes_nothing(self, extractor, monkeypatch, tmp_path):
        async def failing_fetch():
            raise ExtractionUnavailable("Could not load page")

        monkeypatch.setattr(extractor, "fetch_html", failing_fetch)
        with pytest.raises(ExtractionUnavailable):
            asyncio.run(extractor.extract_to_cache(1))
        assert not schema_cache_path(1, tmp_path).exists()


class TestBrowserSession:
    """Tests for failures outside navigation."""

    def test_launch_failure_is_extraction_unavailable(self, extractor, monkeypatch):
        monkeypatch.setattr(scraper, "async_playwright", MissingBrowser)
        with pytest.raises(ExtractionUnavailable) as exc_info:
            asyncio.run(extractor.fetch_html())
        assert "Executable doesn't exist" in exc_info.value.message

    def test_provider_falls_back_when_browser_missing(self, extractor, monkeypatch):
        monkeypatch.setattr(scraper, "async_playwright", MissingBrowser)
        provider = SchemaProvider(sources=[extractor])
        schema, source = asyncio.run(provider.resolve(1))
        assert source == "static"
        assert schema.step == 1
