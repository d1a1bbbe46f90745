from datetime import datetime
from pathlib import Path

import pytest

from inkwell import (
    ContentError,
    ContentStore,
    Document,
    DuplicateDocumentError,
    MalformedFrontMatterError,
    NotFoundError,
    load,
)


def test_load_then_get_scenario(write):
    path = write("post.md", '---\nlayout: post\ntitle: "X"\n---\nhello')
    store = load([path])
    doc = store.get(path.as_posix())
    assert doc.front_matter == {"layout": "post", "title": "X"}
    assert doc.body == "hello"


def test_front_matter_round_trip(write):
    front_matter = {
        "layout": "post",
        "title": "Testing Django",
        "date": "2015-05-01 10:00:00",
        "categories": "django testing",
        "author": "Jan",
        "permalink": "/testing/",
    }
    lines = "".join(f"{k}: {v}\n" for k, v in front_matter.items())
    path = write("testing.md", f"---\n{lines}---\nbody\n")
    doc = load([path]).get(path.as_posix())
    assert doc.front_matter == front_matter


def test_body_preserved_with_code_blocks(write):
    body = "Intro\n\n```python\nclass A:\n    pass\n```\n\n    indented code\n"
    path = write("code.md", "---\ntitle: Code\n---\n" + body)
    assert load([path]).get(path.as_posix()).body == body


def test_missing_closing_delimiter_fails_load(write):
    good = write("good.md", "---\ntitle: ok\n---\n")
    bad = write("bad.md", "---\ntitle: never closed\nbody\n")
    with pytest.raises(MalformedFrontMatterError) as excinfo:
        load([good, bad])
    assert excinfo.value.source_path == bad.as_posix()


def test_get_unknown_path(write):
    store = load([write("a.md", "---\n---\n")])
    with pytest.raises(NotFoundError) as excinfo:
        store.get("nonexistent")
    assert excinfo.value.path == "nonexistent"
    assert isinstance(excinfo.value, LookupError)
    assert isinstance(excinfo.value, ContentError)


def test_list_is_restartable_and_ordered(write):
    paths = [
        write("zeta.md", "---\n---\n"),
        write("alpha.md", "---\n---\n"),
        write("mid.md", "---\n---\n"),
    ]
    docs = load(paths).list()
    first = [d.path for d in docs]
    second = [d.path for d in docs]
    assert first == second == [p.as_posix() for p in paths]
    assert len(docs) == 3


def test_list_called_twice_matches(site):
    store = ContentStore.from_site(site)
    assert store.list().paths() == store.list().paths()


def test_get_accepts_path_objects(write):
    path = write("about.md", "---\ntitle: About\n---\n")
    store = load([path])
    assert store.get(path).title == "About"
    assert path in store
    assert "missing.md" not in store
    assert 42 not in store


def test_root_relative_paths(tmp_path, write):
    path = write("pages/about.md", "---\ntitle: About\n---\n")
    store = ContentStore.load([path], root=tmp_path)
    assert store.list().paths() == ["pages/about.md"]
    assert store.get("pages/about.md").title == "About"
    assert store.get(path.as_posix()).path == "pages/about.md"


def test_duplicate_sources_rejected(write):
    path = write("a.md", "---\n---\n")
    with pytest.raises(DuplicateDocumentError):
        load([path, str(path)])


def test_documents_are_immutable(write):
    doc = load([write("a.md", "---\ntitle: T\n---\n")]).list()[0]
    with pytest.raises(AttributeError):
        doc.body = "changed"
    with pytest.raises(TypeError):
        doc.front_matter["title"] = "changed"
    assert hash(doc) == hash(doc.path)


def test_store_from_documents():
    docs = [
        Document(path="a.md", front_matter={"title": "A"}, body=""),
        Document(path="b.md", front_matter={}, body="b"),
    ]
    store = ContentStore(docs)
    assert len(store) == 2
    assert [d.path for d in store] == ["a.md", "b.md"]
    assert store.get("b.md").body == "b"


def test_missing_source_file_propagates(tmp_path):
    with pytest.raises(FileNotFoundError):
        load([tmp_path / "missing.md"])


def test_from_site_discovers_documents(site):
    store = ContentStore.from_site(site)
    assert store.list().paths() == [
        "_posts/2015-05-01-class-based-views.md",
        "_posts/2015-06-12-django-signals.markdown",
        "about.md",
    ]
    views = store.get("_posts/2015-05-01-class-based-views.md")
    assert views.kind == "post"
    assert views.date == datetime(2015, 5, 1, 10, 30)
    assert views.url == "/django/python/2015/05/01/class-based-views.html"
    assert "```python" in views.body
    assert store.get("about.md").url == "/about/"


def test_from_site_with_drafts(site):
    store = ContentStore.from_site(site, include_drafts=True)
    draft = store.get("_drafts/orm-tricks.md")
    assert draft.draft
    assert draft.kind == "post"
    assert draft.date is not None
    assert store.list().paths()[0] == "_drafts/orm-tricks.md"


def test_from_site_reads_config(site):
    (site / "_config.yml").write_text("permalink: pretty\n", encoding="utf-8")
    store = ContentStore.from_site(site)
    assert (
        store.get("_posts/2015-06-12-django-signals.markdown").url
        == "/django/2015/06/12/django-signals/"
    )


def test_from_site_rejects_malformed_file(site):
    (site / "broken.md").write_text("---\ntitle: oops\n", encoding="utf-8")
    with pytest.raises(MalformedFrontMatterError) as excinfo:
        ContentStore.from_site(site)
    assert excinfo.value.source_path == "broken.md"


def test_from_site_requires_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        ContentStore.from_site(tmp_path / "nope")


def test_categories_index(site):
    categories = ContentStore.from_site(site).categories()
    assert sorted(categories) == ["django", "python"]
    assert categories["django"].paths() == [
        "_posts/2015-05-01-class-based-views.md",
        "_posts/2015-06-12-django-signals.markdown",
    ]
    assert len(categories["python"]) == 1


def test_custom_builder_is_used(write):
    calls = []

    class RecordingBuilder:
        def build(self, source: Path, key: str) -> Document:
            calls.append(key)
            return Document(path=key, front_matter={}, body="")

    path = write("x.md", "not even parsed")
    store = ContentStore.load([path], builder=RecordingBuilder())
    assert calls == [path.as_posix()]
    assert len(store) == 1


def test_yaml_document_end_is_not_a_closing_delimiter(write):
    path = write("p.md", "---\ntitle: T\n...\nno closing dashes ever\n")
    with pytest.raises(MalformedFrontMatterError, match="closing"):
        load([path])


def test_from_site_uses_custom_loader(site):
    class AboutOnly:
        def iter_files(self, include_drafts=False):
            return [site / "about.md"]

    store = ContentStore.from_site(site, loader=AboutOnly())
    assert store.list().paths() == ["about.md"]
