"""
Scraped-schema cache documents.

The scraper writes one JSON file per step; the provider and the
/scraped-schema endpoint read them back. Writers and readers run in
separate invocations, and concurrent writers simply overwrite each other.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from udyam_form.errors import ExtractionUnavailable
from udyam_form.models.field_definitions import FormSchema

logger = logging.getLogger(__name__)


def schema_cache_path(step: int, cache_dir: str | Path) -> Path:
    return Path(cache_dir) / f"step{step}.json"


def write_schema_document(schema: FormSchema, cache_dir: str | Path) -> Path:
    """Write a schema document for its step, replacing any previous one."""
    path = schema_cache_path(schema.step, cache_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(schema.to_document(), indent=2, ensure_ascii=False), encoding="utf-8")
    logger.info(f"Wrote step {schema.step} schema ({len(schema.fields)} fields) to {path}")
    return path


def parse_schema_document(document: object, step: int) -> FormSchema:
    """
    Validate a decoded schema document for ``step``.

    Raises:
        ExtractionUnavailable: If the document is not a usable schema.
    """
    try:
        schema = FormSchema.model_validate(document)
    except ValidationError as e:
        raise ExtractionUnavailable(
            "Schema document is malformed", {"step": step, "errors": e.error_count()}
        ) from e
    if schema.step != step:
        raise ExtractionUnavailable(
            "Schema document is for a different step", {"step": step, "document_step": schema.step}
        )
    if not schema.fields:
        raise ExtractionUnavailable("Schema document has no fields", {"step": step})
    return schema


def load_schema_document(step: int, cache_dir: str | Path) -> dict:
    """
    Read the raw cached document for a step.

    Raises:
        FileNotFoundError: If no document was written for the step.
        ValueError: If the file is not valid JSON.
    """
    path = schema_cache_path(step, cache_dir)
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def read_schema_document(step: int, cache_dir: str | Path) -> FormSchema:
    """
    Read and validate the cached schema for a step.

    Raises:
        ExtractionUnavailable: If the file is missing or malformed.
    """
    try:
        document = load_schema_document(step, cache_dir)
    except FileNotFoundError as e:
        raise ExtractionUnavailable("No cached schema", {"step": step}) from e
    except (OSError, ValueError) as e:
        raise ExtractionUnavailable(f"Unreadable cached schema: {e}", {"step": step}) from e
    return parse_schema_document(document, step)
