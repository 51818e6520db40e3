"""
Schema resolution: static defaults, scraped-schema cache and the provider chain.
"""

from udyam_form.schema.defaults import (
    DEFAULT_SCHEMAS,
    SUPPORTED_STEPS,
    get_default_schema,
)
from udyam_form.schema.provider import (
    CachedExtractionSource,
    RemoteExtractionSource,
    SchemaProvider,
    SchemaSource,
    StaticSchemaSource,
)
from udyam_form.schema.store import (
    read_schema_document,
    schema_cache_path,
    write_schema_document,
)

__all__ = [
    "DEFAULT_SCHEMAS",
    "SUPPORTED_STEPS",
    "get_default_schema",
    "SchemaSource",
    "RemoteExtractionSource",
    "CachedExtractionSource",
    "StaticSchemaSource",
    "SchemaProvider",
    "read_schema_document",
    "schema_cache_path",
    "write_schema_document",
]
