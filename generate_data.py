"""
Masterpiece collection – data generation script.

Queries Wikidata for the most linked paintings that have an image,
transforms and deduplicates them, and writes data.json.

Usage:
    python generate_data.py

Configuration:
    - LIMIT: Number of results requested (default 120), from env or .env
"""

import logging
import sys
import time
from pathlib import Path
from typing import Callable

from masterpieces.ingest import LIMIT, build_sparql, fetch_sparql, fetch_with_retry
from masterpieces.models import SparqlResponse
from masterpieces.transform import OUT_FILE, dedupe_by_id, transform_bindings, write_artworks

logger = logging.getLogger(__name__)


def generate(
    limit: int = LIMIT,
    out_path: Path = OUT_FILE,
    fetch: Callable[[str], dict] = fetch_sparql,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Fetch, transform, deduplicate and write artworks.

    Args:
        limit: Number of results requested from WDQS
        out_path: Output JSON file (overwritten)
        fetch: query -> parsed JSON body; retried on failure
        sleep: Called with the backoff delay between attempts

    Returns:
        Number of artworks written.
    """
    query = build_sparql(limit)
    data = fetch_with_retry(query, fetch=fetch, sleep=sleep)

    response = SparqlResponse.model_validate(data)
    artworks = dedupe_by_id(transform_bindings(response.results.bindings))

    write_artworks(artworks, out_path)
    return len(artworks)


def main():
    """Main entry point: regenerate data.json, exit 1 on failure."""
    logging.basicConfig(level=logging.INFO)
    logger.info(f"Generating {OUT_FILE} (LIMIT={LIMIT}) ...")
    try:
        count = generate()
    except Exception:
        logger.exception("Generation failed.")
        sys.exit(1)
    logger.info(f"Done. Wrote {count} items to {OUT_FILE}")


if __name__ == "__main__":
    main()
