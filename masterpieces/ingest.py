"""
Wikidata Query Service – ingestion.

Builds the painting SPARQL query and fetches results from WDQS with a
bounded retry loop (linear backoff between attempts).

Endpoint: GET https://query.wikidata.org/sparql?format=json&query=...
"""

import logging
import os
import time
from typing import Callable

import requests
from dotenv import load_dotenv

load_dotenv()
logger = logging.getLogger(__name__)

SPARQL_ENDPOINT = "https://query.wikidata.org/sparql"
# WDQS may reject requests without a descriptive User-Agent
HEADERS = {
    "Accept": "application/sparql-results+json",
    "User-Agent": "masterpiece-collection/1.0 (local dev; contact: none)",
}
REQUEST_TIMEOUT = 60
DEFAULT_LIMIT = 120
MAX_TRIES = 5
BACKOFF_SECONDS = 1.2
ERROR_BODY_CHARS = 300


def parse_limit(raw: str | None, default: int = DEFAULT_LIMIT) -> int:
    """Coerce the LIMIT setting to int; missing or non-numeric falls back to default."""
    if raw is None or not raw.strip():
        return default
    try:
        # Integers only: "12.5" and "1e2" fall back to default
        return int(raw)
    except ValueError:
        return default


LIMIT = parse_limit(os.getenv("LIMIT"))


class SparqlQueryError(Exception):
    """WDQS answered with a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str, body: str = ""):
        self.status_code = status_code
        self.reason = reason
        self.body = body[:ERROR_BODY_CHARS]
        super().__init__(f"WDQS failed: {status_code} {reason}\n{self.body}")


def build_sparql(limit: int = DEFAULT_LIMIT) -> str:
    """
    Build the query for paintings (Q3305213) that have an image (P18),
    optionally a creator (P170), labelled in English then Japanese,
    most linked first.
    """
    return f"""
SELECT ?item ?itemLabel ?creatorLabel ?image ?sitelinks WHERE {{
  ?item wdt:P31 wd:Q3305213;
        wdt:P18 ?image.
  OPTIONAL {{ ?item wdt:P170 ?creator. }}
  ?item wikibase:sitelinks ?sitelinks.
  SERVICE wikibase:label {{ bd:serviceParam wikibase:language "en,ja". }}
}}
ORDER BY DESC(?sitelinks)
LIMIT {limit}
"""


def fetch_sparql(query: str, session: requests.Session | None = None) -> dict:
    """
    Run one SPARQL query against WDQS.

    Args:
        query: SPARQL text (URL-encoded by requests)
        session: Optional requests session; module-level requests.get otherwise

    Returns:
        Parsed JSON body.

    Raises:
        SparqlQueryError: on a non-2xx response
        requests.RequestException: on network failure or an undecodable body
    """
    params = {"format": "json", "query": query}
    http = session or requests

    logger.info(f"Requesting: {SPARQL_ENDPOINT}")
    response = http.get(
        SPARQL_ENDPOINT, params=params, headers=HEADERS, timeout=REQUEST_TIMEOUT
    )

    if not 200 <= response.status_code < 300:
        raise SparqlQueryError(response.status_code, response.reason or "", response.text or "")

    return response.json()


def fetch_with_retry(
    query: str,
    fetch: Callable[[str], dict] = fetch_sparql,
    sleep: Callable[[float], None] = time.sleep,
    max_tries: int = MAX_TRIES,
    backoff_seconds: float = BACKOFF_SECONDS,
) -> dict:
    """
    Call fetch(query) up to max_tries times, sleeping backoff_seconds * attempt
    after each failed attempt. The last failure is re-raised.
    """
    for attempt in range(1, max_tries + 1):
        try:
            return fetch(query)
        except (SparqlQueryError, requests.RequestException) as e:
            logger.warning(f"Attempt {attempt}/{max_tries} failed: {e}")
            if attempt == max_tries:
                raise
            sleep(backoff_seconds * attempt)

    raise ValueError(f"max_tries must be at least 1, got {max_tries}")
