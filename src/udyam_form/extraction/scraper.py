"""
Live form extractor.

Loads the Udyam registration page in headless Chromium, snapshots the
rendered HTML and runs the field heuristics over it. It is an offline batch
job: one browser session, one page load, at most one cache file per step.

Usage:
    extractor = FormExtractor()
    schema, path = await extractor.extract_to_cache(step=2)
"""

import asyncio
import logging
from pathlib import Path

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page, async_playwright

from udyam_form.config import UdyamFormConfig, get_config
from udyam_form.errors import ExtractionUnavailable
from udyam_form.extraction.constants import BROWSER_ARGS
from udyam_form.extraction.steps import build_step_schema
from udyam_form.models.field_definitions import FormSchema
from udyam_form.schema.provider import SchemaSource
from udyam_form.schema.store import write_schema_document
from udyam_form.validation.patterns import DEFAULT_REGISTRY, PatternRegistry

logger = logging.getLogger(__name__)


class FormExtractor(SchemaSource):
    """Scrapes the live registration page into FormSchema documents."""

    name = "live"

    def __init__(
        self,
        config: UdyamFormConfig | None = None,
        registry: PatternRegistry = DEFAULT_REGISTRY,
    ):
        self.config = config or get_config()
        self.registry = registry

    async def fetch_html(self) -> str:
        """
        Load the target page and return its rendered HTML.

        Raises:
            ExtractionUnavailable: If the browser cannot start or the page
                cannot be loaded after one retry.
        """
        try:
            async with async_playwright() as p:
                browser = await p.chromium.launch(headless=self.config.headless, args=BROWSER_ARGS)
                try:
                    context = await browser.new_context(
                        user_agent=self.config.user_agent,
                        extra_http_headers={"accept-language": self.config.accept_language},
                    )
                    page = await context.new_page()
                    page.set_default_navigation_timeout(self.config.navigation_timeout_ms)
                    await self._navigate(page)
                    return await page.content()
                finally:
                    await browser.close()
        except PlaywrightError as e:
            logger.error(f"Browser session failed: {e.message}")
            raise ExtractionUnavailable(
                f"Browser session failed: {e.message}", {"url": self.config.target_url}
            ) from e

    async def _navigate(self, page: Page) -> None:
        url = self.config.target_url
        timeout = self.config.navigation_timeout_ms
        try:
            await page.goto(url, wait_until="networkidle", timeout=timeout)
            return
        except PlaywrightError as e:
            logger.warning(f"Navigation to {url} failed ({e.message}), retrying once")

        await asyncio.sleep(self.config.navigation_retry_delay)
        try:
            await page.goto(url, wait_until="domcontentloaded", timeout=timeout)
        except PlaywrightError as e:
            raise ExtractionUnavailable(
                f"Could not load {url}: {e.message}", {"url": url}
            ) from e

    async def produce_schema(self, step: int) -> FormSchema:
        html = await self.fetch_html()
        return build_step_schema(html, step, self.registry)

    async def extract_to_cache(
        self,
        step: int,
        html: str | None = None,
        cache_dir: str | Path | None = None,
    ) -> tuple[FormSchema, Path]:
        """
        Extract the schema for a step and write it to the cache.

        Args:
            step: Registration step number.
            html: Use this HTML instead of loading the live page.
            cache_dir: Override the configured cache directory.

        Returns:
            The schema and the path it was written to.

        Raises:
            ExtractionUnavailable: If the live page cannot be loaded; nothing
                is written in that case.
        """
        if html is None:
            schema = await self.produce_schema(step)
        else:
            schema = build_step_schema(html, step, self.registry)
        path = write_schema_document(schema, cache_dir or self.config.schema_cache_dir)
        return schema, path
