"""Tests for static schemas, the schema cache and the provider chain."""

import asyncio
import json

import httpx
import pytest

from udyam_form.config import UdyamFormConfig
from udyam_form.errors import ExtractionUnavailable, UnknownStepError
from udyam_form.models.field_definitions import FormField, FormSchema
from udyam_form.models.submission import SUBMISSION_FIELDS
from udyam_form.schema.defaults import DEFAULT_SCHEMAS, get_default_schema
from udyam_form.schema.provider import (
    CachedExtractionSource,
    RemoteExtractionSource,
    SchemaProvider,
)
from udyam_form.schema.store import (
    parse_schema_document,
    read_schema_document,
    schema_cache_path,
    write_schema_document,
)


def scraped_schema(step: int, label: str = "Scraped Field") -> FormSchema:
    return FormSchema(
        title="Udyam Registration (scraped)",
        step=step,
        fields=[FormField(id="f1", name="f1", label=label)],
    )


def unreachable_transport() -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.MockTransport(handler)


class TestDefaultSchemas:
    """Tests for the hand-authored schemas."""

    def test_every_step_has_fields(self):
        for step, schema in DEFAULT_SCHEMAS.items():
            assert schema.step == step
            assert schema.fields

    def test_steps_cover_submission_fields(self):
        """Test that the two steps together collect every submission field."""
        names = set(DEFAULT_SCHEMAS[1].field_names()) | set(DEFAULT_SCHEMAS[2].field_names())
        assert set(SUBMISSION_FIELDS) - {"otpVerified"} <= names

    def test_step1_aadhaar_field(self):
        field = get_default_schema(1).get_field("aadhaarNumber")
        assert field.type == "tel"
        assert field.validation.pattern == r"^[2-9][0-9]{11}$"
        assert field.validation.max_length == 12

    def test_step2_pincode_optional(self):
        field = get_default_schema(2).get_field("pincode")
        assert field.validation.required is False

    def test_step2_organisation_options(self):
        field = get_default_schema(2).get_field("organisationType")
        assert field.type == "select"
        assert [o.value for o in field.options][:2] == ["proprietary", "huf"]

    def test_unknown_step(self):
        with pytest.raises(UnknownStepError):
            get_default_schema(3)


class TestSchemaStore:
    """Tests for the scraped-schema cache files."""

    def test_write_and_read(self, tmp_path):
        schema = scraped_schema(1)
        path = write_schema_document(schema, tmp_path / "generated")
        assert path == schema_cache_path(1, tmp_path / "generated")
        assert path.name == "step1.json"
        assert read_schema_document(1, tmp_path / "generated") == schema

    def test_document_is_indented_json(self, tmp_path):
        path = write_schema_document(scraped_schema(2), tmp_path)
        text = path.read_text(encoding="utf-8")
        assert text.startswith("{\n  ")
        assert json.loads(text)["step"] == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(ExtractionUnavailable):
            read_schema_document(1, tmp_path)

    def test_invalid_json(self, tmp_path):
        schema_cache_path(1, tmp_path).write_text("{not json", encoding="utf-8")
        with pytest.raises(ExtractionUnavailable):
            read_schema_document(1, tmp_path)

    def test_wrong_step(self):
        with pytest.raises(ExtractionUnavailable):
            parse_schema_document(scraped_schema(2).to_document(), 1)

    def test_no_fields(self):
        with pytest.raises(ExtractionUnavailable):
            parse_schema_document({"title": "Empty", "step": 1, "fields": []}, 1)

    def test_malformed_document(self):
        with pytest.raises(ExtractionUnavailable):
            parse_schema_document({"title": "Bad", "step": 1, "fields": [{"id": "x"}]}, 1)


class TestRemoteExtractionSource:
    """Tests for the HTTP extraction source."""

    def test_success(self):
        document = scraped_schema(1, "Remote Field").to_document()

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/scraped-schema/1"
            return httpx.Response(200, json=document)

        source = RemoteExtractionSource("http://extractor:4000/", transport=httpx.MockTransport(handler))
        schema = asyncio.run(source.produce_schema(1))
        assert schema.fields[0].label == "Remote Field"

    def test_not_found(self):
        source = RemoteExtractionSource(
            "http://extractor:4000",
            transport=httpx.MockTransport(lambda request: httpx.Response(404, json={"error": "x"})),
        )
        with pytest.raises(ExtractionUnavailable):
            asyncio.run(source.produce_schema(1))

    def test_unreachable(self):
        source = RemoteExtractionSource("http://extractor:4000", transport=unreachable_transport())
        with pytest.raises(ExtractionUnavailable):
            asyncio.run(source.produce_schema(2))

    def test_invalid_json(self):
        source = RemoteExtractionSource(
            "http://extractor:4000",
            transport=httpx.MockTransport(lambda request: httpx.Response(200, text="<html>")),
        )
        with pytest.raises(ExtractionUnavailable):
            asyncio.run(source.produce_schema(1))


class TestSchemaProvider:
    """Tests for the remote -> cache -> static fallback chain."""

    def test_remote_wins(self, tmp_path):
        write_schema_document(scraped_schema(1, "Cached Field"), tmp_path)
        remote_doc = scraped_schema(1, "Remote Field").to_document()
        provider = SchemaProvider(
            sources=[
                RemoteExtractionSource(
                    "http://extractor",
                    transport=httpx.MockTransport(lambda request: httpx.Response(200, json=remote_doc)),
                ),
                CachedExtractionSource(tmp_path),
            ]
        )
        schema, source = asyncio.run(provider.resolve(1))
        assert source == "remote"
        assert schema.fields[0].label == "Remote Field"

    def test_cache_when_remote_unreachable(self, tmp_path):
        write_schema_document(scraped_schema(2, "Cached Field"), tmp_path)
        provider = SchemaProvider(
            sources=[
                RemoteExtractionSource("http://extractor", transport=unreachable_transport()),
                CachedExtractionSource(tmp_path),
            ]
        )
        schema, source = asyncio.run(provider.resolve(2))
        assert source == "cache"
        assert schema.fields[0].label == "Cached Field"

    def test_static_when_nothing_available(self, tmp_path):
        """Test the static default is served when remote and cache both fail."""
        provider = SchemaProvider(
            sources=[
                RemoteExtractionSource("http://extractor", transport=unreachable_transport()),
                CachedExtractionSource(tmp_path),
            ]
        )
        schema, source = asyncio.run(provider.resolve(1))
        assert source == "static"
        assert schema == get_default_schema(1)

    def test_wrong_step_cache_ignored(self, tmp_path):
        """Test a cache file holding another step's schema is skipped."""
        write_schema_document(scraped_schema(2), tmp_path)
        schema_cache_path(1, tmp_path).write_text(
            schema_cache_path(2, tmp_path).read_text(encoding="utf-8"), encoding="utf-8"
        )
        provider = SchemaProvider(sources=[CachedExtractionSource(tmp_path)])
        assert asyncio.run(provider.resolve(1))[1] == "static"

    def test_malformed_cache_ignored(self, tmp_path):
        schema_cache_path(1, tmp_path).write_text('{"title": 1}', encoding="utf-8")
        provider = SchemaProvider(sources=[CachedExtractionSource(tmp_path)])
        assert asyncio.run(provider.get_schema(1)) == get_default_schema(1)

    def test_unknown_step(self, tmp_path):
        provider = SchemaProvider(sources=[CachedExtractionSource(tmp_path)])
        with pytest.raises(UnknownStepError):
            asyncio.run(provider.get_schema(7))

    def test_from_config(self, tmp_path):
        config = UdyamFormConfig(extraction_url="http://extractor:4000", schema_cache_dir=str(tmp_path))
        provider = SchemaProvider.from_config(config)
        assert [s.name for s in provider.sources] == ["remote", "cache"]

    def test_from_config_without_remote(self, tmp_path):
        config = UdyamFormConfig(extraction_url=None, schema_cache_dir=str(tmp_path))
        provider = SchemaProvider.from_config(config)
        assert [s.name for s in provider.sources] == ["cache"]
