import io
import json

from inkwell.export import document_to_dict, dump_json, export_store
from inkwell.store import ContentStore


def test_document_to_dict(site):
    store = ContentStore.from_site(site)
    record = document_to_dict(store.get("_posts/2015-05-01-class-based-views.md"))
    assert record["kind"] == "post"
    assert record["date"] == "2015-05-01T10:30:00"
    assert record["categories"] == ["django", "python"]
    assert record["front_matter"]["author"] == "Jan"
    assert record["url"] == "/django/python/2015/05/01/class-based-views.html"
    assert record["body"].startswith("Function views")

    about = document_to_dict(store.get("about.md"), include_body=False)
    assert about["date"] is None
    assert "body" not in about


def test_export_store(site):
    payload = export_store(ContentStore.from_site(site))
    assert [d["path"] for d in payload["documents"]] == [
        "_posts/2015-05-01-class-based-views.md",
        "_posts/2015-06-12-django-signals.markdown",
        "about.md",
    ]
    assert payload["categories"]["python"] == ["_posts/2015-05-01-class-based-views.md"]


def test_dump_json_is_valid(site):
    buffer = io.StringIO()
    dump_json(ContentStore.from_site(site), buffer, include_body=False)
    data = json.loads(buffer.getvalue())
    assert len(data["documents"]) == 3
    assert buffer.getvalue().endswith("\n")
