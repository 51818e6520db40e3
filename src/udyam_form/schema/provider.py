"""
Schema provider.

Resolves the schema for a registration step, first success wins:

1. a freshly served extraction (GET {extraction_url}/scraped-schema/{step})
2. the cached extraction document written by the scraper
3. the hand-authored static default

Failures of 1 and 2 are logged, never surfaced: for a supported step the
caller always gets a schema.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

import httpx

from udyam_form.config import UdyamFormConfig, get_config
from udyam_form.errors import ExtractionUnavailable, UnknownStepError
from udyam_form.models.field_definitions import FormSchema
from udyam_form.schema.defaults import SUPPORTED_STEPS, get_default_schema
from udyam_form.schema.store import parse_schema_document, read_schema_document

logger = logging.getLogger(__name__)


class SchemaSource(ABC):
    """Anything that can produce the schema for a step."""

    name: str = "source"

    @abstractmethod
    async def produce_schema(self, step: int) -> FormSchema:
        """
        Produce the schema for ``step``.

        Raises:
            ExtractionUnavailable: If this source cannot answer.
        """


class RemoteExtractionSource(SchemaSource):
    """Fetches a served extraction over HTTP."""

    name = "remote"

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def produce_schema(self, step: int) -> FormSchema:
        url = f"{self.base_url}/scraped-schema/{step}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, headers={"Cache-Control": "no-store"})
                response.raise_for_status()
                document = response.json()
        except httpx.HTTPStatusError as e:
            raise ExtractionUnavailable(
                f"Extraction endpoint returned {e.response.status_code}", {"url": url}
            ) from e
        except httpx.HTTPError as e:
            raise ExtractionUnavailable(
                f"Extraction endpoint unreachable: {type(e).__name__}", {"url": url}
            ) from e
        except ValueError as e:
            raise ExtractionUnavailable("Extraction endpoint returned invalid JSON", {"url": url}) from e
        return parse_schema_document(document, step)


class CachedExtractionSource(SchemaSource):
    """Reads the most recent scraper output from disk."""

    name = "cache"

    def __init__(self, cache_dir: str | Path):
        self.cache_dir = Path(cache_dir)

    async def produce_schema(self, step: int) -> FormSchema:
        return read_schema_document(step, self.cache_dir)


class StaticSchemaSource(SchemaSource):
    """Hand-authored defaults; always available for supported steps."""

    name = "static"

    async def produce_schema(self, step: int) -> FormSchema:
        return get_default_schema(step)


class SchemaProvider:
    """
    Fallback chain over schema sources.

    Usage:
        provider = SchemaProvider.from_config(get_config())
        schema = await provider.get_schema(1)
        schema, source = await provider.resolve(2)  # source: "remote", "cache" or "static"
    """

    def __init__(
        self,
        sources: Sequence[SchemaSource] = (),
        fallback: SchemaSource | None = None,
    ):
        self.sources = list(sources)
        self.fallback = fallback or StaticSchemaSource()

    @classmethod
    def from_config(cls, config: UdyamFormConfig | None = None) -> "SchemaProvider":
        config = config or get_config()
        sources: list[SchemaSource] = []
        if config.extraction_url:
            sources.append(RemoteExtractionSource(config.extraction_url, config.extraction_timeout))
        sources.append(CachedExtractionSource(config.schema_cache_dir))
        return cls(sources=sources)

    async def get_schema(self, step: int) -> FormSchema:
        """
        Get the schema for a step.

        Raises:
            UnknownStepError: Only for steps that have no static default.
        """
        schema, _ = await self.resolve(step)
        return schema

    async def resolve(self, step: int) -> tuple[FormSchema, str]:
        """Like get_schema, but also return the name of the source that answered."""
        if step not in SUPPORTED_STEPS:
            raise UnknownStepError(step)

        for source in self.sources:
            try:
                schema = await source.produce_schema(step)
            except ExtractionUnavailable as e:
                logger.info(f"Schema source '{source.name}' unavailable for step {step}: {e}")
                continue
            logger.debug(f"Step {step} schema served by '{source.name}'")
            return schema, source.name

        schema = await self.fallback.produce_schema(step)
        return schema, self.fallback.name
