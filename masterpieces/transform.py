"""
Wikidata Query Service – transform bindings to artwork records.

Maps SPARQL bindings to slim {id, title, artist, image} records, rewrites
image URLs to a fixed thumbnail width, drops duplicate ids, and writes
the pretty-printed JSON array to data.json.
"""

import json
from pathlib import Path
from typing import Iterable
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from masterpieces.models import Artwork, PaintingBinding

OUT_FILE = Path("data.json")
THUMB_WIDTH = 360
UNKNOWN_ARTIST = "Unknown"


def entity_id(url: str) -> str:
    """Last path segment of an entity URL (e.g. .../entity/Q12418 -> Q12418)."""
    return url.split("/")[-1]


def to_thumb(url: str, width: int = THUMB_WIDTH) -> str:
    """
    Force the width query parameter of an image URL.

    Returns the input unchanged when it is not an absolute URL.
    """
    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError for a non-numeric or out-of-range port
    except ValueError:
        return url
    if not parts.scheme or not parts.netloc:
        return url

    query = []
    replaced = False
    for key, value in parse_qsl(parts.query, keep_blank_values=True):
        if key != "width":
            query.append((key, value))
        elif not replaced:
            query.append((key, str(width)))
            replaced = True
    if not replaced:
        query.append(("width", str(width)))

    return urlunsplit(parts._replace(query=urlencode(query)))


def extract_artwork(binding: PaintingBinding) -> dict:
    """Extract the output fields from one binding, with title/artist defaults."""
    id_ = entity_id(binding.item.value)
    return {
        "id": id_,
        "title": binding.itemLabel.value if binding.itemLabel else id_,
        "artist": binding.creatorLabel.value if binding.creatorLabel else UNKNOWN_ARTIST,
        "image": to_thumb(binding.image.value, THUMB_WIDTH),
    }


def transform_bindings(bindings: Iterable[PaintingBinding]) -> list[Artwork]:
    """One validated Artwork per binding, in source order."""
    return [Artwork.model_validate(extract_artwork(b)) for b in bindings]


def dedupe_by_id(artworks: Iterable[Artwork]) -> list[Artwork]:
    """Keep the first artwork seen for each id; order of first occurrences is kept."""
    seen: set[str] = set()
    unique = []
    for artwork in artworks:
        if artwork.id in seen:
            continue
        seen.add(artwork.id)
        unique.append(artwork)
    return unique


def write_artworks(artworks: list[Artwork], out_path: Path = OUT_FILE) -> None:
    """Write artworks as a 2-space indented JSON array with a trailing newline."""
    payload = [a.model_dump() for a in artworks]
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(json.dumps(payload, indent=2, ensure_ascii=False) + "\n")
