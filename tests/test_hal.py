import pytest
from hyper_resource.core.errors import AmbiguousLinkError
from hyper_resource.core.hal import (
    EmbeddedRef,
    Link,
    LinkRef,
    as_list,
    count,
    get_self_link,
    link,
    links,
    resolve_embedded,
    resolve_links,
)

BOOK = {
    "title": "The Design of Everyday Things",
    "_links": {
        "self": {"href": "/books/1", "type": "book"},
        "author": [
            {"href": "/people/1", "name": "norman", "title": "Don Norman"},
            {"href": "/people/2", "name": "editor"},
        ],
    },
    "_embedded": {
        "related": [
            {"title": "Don't make me think"},
            {
                "_links": {"self": {"href": "/books/7", "name": "reference"}},
                "title": "The Elements of Typographic Style",
            },
        ]
    },
}


def test_as_list_normalizes_scalars_and_missing():
    assert as_list(None) == []
    assert as_list({"href": "/a"}) == [{"href": "/a"}]
    assert as_list([{"href": "/a"}, {"href": "/b"}]) == [
        {"href": "/a"},
        {"href": "/b"},
    ]


def test_resolve_links_classifies_and_filters_by_name():
    refs = resolve_links(BOOK, "author")
    assert [type(r) for r in refs] == [LinkRef, LinkRef]
    assert [r.link.href for r in refs] == ["/people/1", "/people/2"]

    named = resolve_links(BOOK, "author", "editor")
    assert [r.link.href for r in named] == ["/people/2"]

    assert resolve_links(BOOK, "author", "nobody") == []
    assert resolve_links(BOOK, "missing") == []


def test_resolve_embedded_filters_on_self_link_name():
    refs = resolve_embedded(BOOK, "related")
    assert [type(r) for r in refs] == [EmbeddedRef, EmbeddedRef]

    named = resolve_embedded(BOOK, "related", "reference")
    assert len(named) == 1
    assert named[0].data["title"] == "The Elements of Typographic Style"


def test_scalar_relation_behaves_like_single_element_list():
    scalar = {"_links": {"next": {"href": "/books/2"}}}
    listed = {"_links": {"next": [{"href": "/books/2"}]}}
    assert count(scalar, "next") == count(listed, "next") == 1
    assert links(scalar, "next") == links(listed, "next")


def test_non_object_entries_are_dropped():
    payload = {"_links": {"next": ["/books/2", {"href": "/books/3"}]}}
    assert [r.link.href for r in resolve_links(payload, "next")] == ["/books/3"]


def test_count_without_links_or_embedded_is_zero():
    assert count({}, "anything") == 0
    assert count({"_links": None, "_embedded": None}, "anything") == 0


def test_count_by_name_never_exceeds_total():
    assert count(BOOK, "related") == 2
    assert count(BOOK, "related", "reference") == 1
    assert count(BOOK, "related", "journals") == 0
    for rel in ("author", "related", "self"):
        for name in ("norman", "reference", "journals"):
            assert count(BOOK, rel, name) <= count(BOOK, rel)


def test_empty_name_means_no_filter():
    assert count(BOOK, "author", "") == 2


def test_get_self_link():
    assert get_self_link({"title": "x"}) is None
    assert get_self_link({"_links": {"next": {"href": "/n"}}}) is None
    first = get_self_link({"_links": {"self": [{"href": "/a"}, {"href": "/b"}]}})
    assert first == Link(href="/a")


def test_links_appends_embedded_self_links_after_links():
    payload = {
        "_links": {"item": {"href": "/items/1"}},
        "_embedded": {
            "item": [
                {"_links": {"self": {"href": "/items/2"}}},
                {"id": 3},  # no self link
            ]
        },
    }
    assert [lk.href for lk in links(payload, "item")] == ["/items/1", "/items/2"]


def test_links_keep_extra_metadata_verbatim():
    payload = {
        "_links": {
            "help": {"href": "/docs", "title": "Docs", "hreflang": "en", "x": [1]}
        }
    }
    found = link(payload, "help")
    assert found.title == "Docs"
    assert found.model_extra == {"hreflang": "en", "x": [1]}


def test_link_defaults_to_self():
    assert link(BOOK).href == "/books/1"


def test_link_zero_one_many():
    assert link(BOOK, "missing") is None
    assert link(BOOK, "author", "norman").title == "Don Norman"
    with pytest.raises(AmbiguousLinkError) as exc:
        link(BOOK, "author")
    assert exc.value.matches == 2


def test_links_never_fail():
    assert links(BOOK, "missing") == []
    assert links({}, "missing") == []
    assert len(links(BOOK, "author")) == 2


def test_non_string_link_metadata_is_read_as_is():
    payload = {"_links": {"author": {"href": "/p/1", "title": 42, "name": 7}}}

    assert count(payload, "author") == 1
    found = links(payload, "author")
    assert found[0].title == 42
    assert found[0].name == 7
    assert link(payload, "author").href == "/p/1"


def test_names_compare_as_is():
    payload = {
        "_links": {
            "author": [{"href": "/p/1", "name": 7}, {"href": "/p/2", "name": "7"}]
        }
    }
    assert [lk.href for lk in links(payload, "author", "7")] == ["/p/2"]


def test_embedded_self_link_with_odd_metadata():
    payload = {
        "_embedded": {
            "x": [
                {"_links": {"self": {"href": "/a", "name": 3}}},
                {"_links": {"self": {"href": "/b", "title": {"en": "B"}}}},
            ]
        }
    }
    assert count(payload, "x") == 2
    assert count(payload, "x", "ref") == 0
    assert [lk.title for lk in links(payload, "x")] == [None, {"en": "B"}]
