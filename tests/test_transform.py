"""Tests for masterpieces transform: to_thumb, extract_artwork, dedupe_by_id, write_artworks."""

import json

from masterpieces.models import Artwork, PaintingBinding
from masterpieces.transform import (
    dedupe_by_id,
    entity_id,
    extract_artwork,
    to_thumb,
    transform_bindings,
    write_artworks,
)


def make_binding(qid, label=None, creator=None, image="http://commons.wikimedia.org/wiki/Special:FilePath/A.jpg"):
    raw = {
        "item": {"type": "uri", "value": f"http://www.wikidata.org/entity/{qid}"},
        "image": {"type": "uri", "value": image},
        "sitelinks": {"type": "literal", "value": "150"},
    }
    if label is not None:
        raw["itemLabel"] = {"type": "literal", "value": label, "xml:lang": "en"}
    if creator is not None:
        raw["creatorLabel"] = {"type": "literal", "value": creator, "xml:lang": "en"}
    return PaintingBinding.model_validate(raw)


def test_entity_id_last_path_segment():
    assert entity_id("http://www.wikidata.org/entity/Q12418") == "Q12418"


def test_to_thumb_adds_width():
    url = "http://commons.wikimedia.org/wiki/Special:FilePath/Mona%20Lisa.jpg"
    assert to_thumb(url) == url + "?width=360"


def test_to_thumb_replaces_existing_width_and_keeps_other_params():
    url = "https://example.org/img.jpg?width=1024&lang=en#top"
    assert to_thumb(url, 200) == "https://example.org/img.jpg?width=200&lang=en#top"


def test_to_thumb_drops_repeated_width():
    assert to_thumb("https://example.org/a.png?width=1&width=2") == "https://example.org/a.png?width=360"


def test_to_thumb_malformed_returned_unchanged():
    assert to_thumb("not a url") == "not a url"
    assert to_thumb("") == ""
    assert to_thumb("http://[::1") == "http://[::1"
    assert to_thumb("http://example.com:abc/x.jpg") == "http://example.com:abc/x.jpg"


def test_extract_artwork_defaults():
    out = extract_artwork(make_binding("Q1"))
    assert out["id"] == "Q1"
    assert out["title"] == "Q1"
    assert out["artist"] == "Unknown"
    assert out["image"].endswith("?width=360")


def test_extract_artwork_full():
    out = extract_artwork(make_binding("Q12418", label="Mona Lisa", creator="Leonardo da Vinci"))
    assert out == {
        "id": "Q12418",
        "title": "Mona Lisa",
        "artist": "Leonardo da Vinci",
        "image": "http://commons.wikimedia.org/wiki/Special:FilePath/A.jpg?width=360",
    }


def test_transform_bindings_keeps_source_order():
    bindings = [make_binding("Q3"), make_binding("Q1"), make_binding("Q2")]
    assert [a.id for a in transform_bindings(bindings)] == ["Q3", "Q1", "Q2"]


def test_dedupe_by_id_keeps_first_occurrence():
    artworks = [
        Artwork(id="Q1", title="First", artist="A", image="i1"),
        Artwork(id="Q2", title="Other", artist="B", image="i2"),
        Artwork(id="Q1", title="Second", artist="C", image="i3"),
        Artwork(id="Q2", title="Again", artist="D", image="i4"),
    ]
    unique = dedupe_by_id(artworks)
    assert [a.id for a in unique] == ["Q1", "Q2"]
    assert unique[0].title == "First"
    assert unique[1].title == "Other"


def test_dedupe_by_id_empty():
    assert dedupe_by_id([]) == []


def test_write_artworks_pretty_json_with_newline(tmp_path):
    out_path = tmp_path / "data.json"
    out_path.write_text("stale", encoding="utf-8")
    write_artworks([Artwork(id="Q1", title="睡蓮", artist="Claude Monet", image="i")], out_path)

    text = out_path.read_text(encoding="utf-8")
    assert text.endswith("]\n")
    assert '\n  {\n    "id": "Q1",' in text
    assert "睡蓮" in text
    assert json.loads(text) == [{"id": "Q1", "title": "睡蓮", "artist": "Claude Monet", "image": "i"}]
