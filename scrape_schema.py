"""
Udyam Form Scraper Entry Point.

Extracts the field schema for a registration step from the live page (or a
saved HTML file) and writes it to the schema cache.

Usage:
    python scrape_schema.py --step 1
    python scrape_schema.py --step 2 --html-file saved_page.html
    python scrape_schema.py --step 1 --cache-dir /tmp/schemas
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Add src to path for local development
sys.path.insert(0, str(Path(__file__).parent / "src"))

from udyam_form.config import get_config
from udyam_form.errors import ExtractionUnavailable
from udyam_form.extraction.scraper import FormExtractor

logger = logging.getLogger("udyam-form-scraper")


def main():
    """Main entry point."""
    config = get_config()

    parser = argparse.ArgumentParser(description="Scrape the Udyam registration form schema")
    parser.add_argument("--step", type=int, choices=[1, 2], default=1, help="Registration step (default: 1)")
    parser.add_argument("--html-file", type=Path, help="Read page HTML from this file instead of the live site")
    parser.add_argument(
        "--cache-dir",
        default=config.schema_cache_dir,
        help=f"Output directory (default: {config.schema_cache_dir})",
    )
    args = parser.parse_args()

    logging.basicConfig(level=config.log_level)

    html = args.html_file.read_text(encoding="utf-8") if args.html_file else None
    try:
        schema, path = asyncio.run(
            FormExtractor(config).extract_to_cache(args.step, html=html, cache_dir=args.cache_dir)
        )
    except ExtractionUnavailable as e:
        logger.error(f"Extraction failed, cache left untouched: {e}")
        sys.exit(1)

    logger.info(f"Saved {len(schema.fields)} fields for step {schema.step} to {path}")


if __name__ == "__main__":
    main()
