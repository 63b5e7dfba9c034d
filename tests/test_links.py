from __future__ import annotations

import pytest

from orginline.inline import (
    ComplexUrl,
    Emphasis,
    EmphasisKind,
    Entity,
    FileUrl,
    FootnoteReference,
    Link,
    ParseConfig,
    Plain,
    SearchUrl,
    Session,
    Stream,
    parseInline,
    parser,
)
from orginline.entities import lookup


@pytest.mark.parametrize(
    ("text", "url"),
    [
        ("[[./a.png]]", FileUrl("./a.png")),
        ("[[/etc/hosts]]", FileUrl("/etc/hosts")),
        ("[[https://x.org]]", ComplexUrl("https", "//x.org")),
        ("[[file:notes.org::*heading]]", ComplexUrl("file", "notes.org::*heading")),
        ("[[mailto:a@b.c]]", ComplexUrl("mailto", "a@b.c")),
        ("[[term]]", SearchUrl("term")),
        ("[[#custom-id]]", SearchUrl("#custom-id")),
    ],
)
def test_url_classification(text, url):
    [node] = parseInline(text)
    assert node.url == url


def test_labelled_link():
    assert parseInline("[[https://x.org][label]]") == [Link(ComplexUrl("https", "//x.org"), (Plain("label"),))]


def test_missing_label_uses_url():
    assert parseInline("[[./a.png]]") == [Link(FileUrl("./a.png"), (Plain("./a.png"),))]
    assert parseInline("[[term]]") == [Link(SearchUrl("term"), (Plain("term"),))]
    assert parseInline("[[term][]]") == [Link(SearchUrl("term"), (Plain("term"),))]


def test_label_markup():
    assert parseInline("[[x][*b* and \\alpha]]") == [
        Link(
            SearchUrl("x"),
            (
                Emphasis(EmphasisKind.Bold, (Plain("b"),)),
                Plain(" and "),
                Entity(lookup("alpha")),
            ),
        ),
    ]


def test_label_doesnt_hold_links():
    [node] = parseInline("[[x][see https://y.org]]")
    assert node.label == (Plain("see https://y.org"),)


@pytest.mark.parametrize("text", ["[[a][b]", "[[]]", "[[a]b]]", "[[a"])
def test_malformed_is_literal(text):
    assert parseInline(text) == [Plain(text)]


def test_label_spans():
    [node] = parseInline("[[x][ab]]")
    assert node.span == (0, 9)
    assert node.label[0].span == (5, 7)


def test_bare_link():
    assert parseInline("see https://orgmode.org/manual now") == [
        Plain("see "),
        Link(ComplexUrl("https", "//orgmode.org/manual"), (Plain("https://orgmode.org/manual"),)),
        Plain(" now"),
    ]


def test_bare_link_stops():
    assert parseInline("(https://x.org)") == [
        Plain("("),
        Link(ComplexUrl("https", "//x.org"), (Plain("https://x.org"),)),
        Plain(")"),
    ]


def test_bare_link_protocol_is_the_whole_letter_run():
    # The protocol runs back to the last non-letter, so a letter prefix is part of it.
    assert parseInline("xhttps://a") == [Link(ComplexUrl("xhttps", "//a"), (Plain("xhttps://a"),))]
    assert parseInline("1https://a") == [
        Plain("1"),
        Link(ComplexUrl("https", "//a"), (Plain("https://a"),)),
    ]
    assert parseInline("https://") == [Plain("https://")]


def test_bare_link_not_mid_word():
    s = Stream("xhttps://a", config=ParseConfig(), session=Session())
    _, i, failed = parser.parseBareLink(s, 1)
    assert failed
    assert i == 1
    _, i, failed = parser.parseBareLink(s, 0)
    assert not failed
    assert i == 10


def test_named_footnote():
    assert parseInline("[fn:1]") == [FootnoteReference("1", None)]
    assert parseInline("[fn:name:]") == [FootnoteReference("name", None)]


def test_inline_footnote_definition():
    assert parseInline("[fn:note:Some *bold* text]") == [
        FootnoteReference(
            "note",
            (Plain("Some "), Emphasis(EmphasisKind.Bold, (Plain("bold"),)), Plain(" text")),
        ),
    ]


def test_footnote_definition_holds_links():
    assert parseInline("[fn:x:see [[https://a.b][here]]]") == [
        FootnoteReference(
            "x",
            (Plain("see "), Link(ComplexUrl("https", "//a.b"), (Plain("here"),))),
        ),
    ]
    assert parseInline("[fn::see https://a.b]") == [
        FootnoteReference(
            "_anon_1",
            (Plain("see "), Link(ComplexUrl("https", "//a.b"), (Plain("https://a.b"),))),
        ),
    ]


def test_anonymous_names_are_unique_in_a_session():
    session = Session()
    first = parseInline("[fn::a] [fn::b]", session=session)
    second = parseInline("[fn::c]", session=session)
    names = [n.name for n in first + second if isinstance(n, FootnoteReference)]
    assert names == ["_anon_1", "_anon_2", "_anon_3"]
    assert all(n.anonymous for n in first if isinstance(n, FootnoteReference))


def test_sessions_are_independent():
    assert parseInline("[fn::a]", session=Session())[0].name == "_anon_1"
    assert parseInline("[fn::a]", session=Session())[0].name == "_anon_1"


def test_failed_footnotes_dont_use_up_names():
    session = Session()
    assert parseInline("[fn::]", session=session) == [Plain("[fn::]")]
    assert parseInline("[fn::a\nb]", session=session)[0] == Plain("[fn::a")
    assert parseInline("[fn::x]", session=session)[0].name == "_anon_1"


def test_footnote_definition_spans():
    [node] = parseInline("[fn:x:ab]")
    assert node.span == (0, 9)
    assert node.definition[0].span == (6, 8)


def test_footnote_depth_limit():
    assert parseInline("[fn:x:*a*]", config=ParseConfig(maxDepth=1)) == [
        FootnoteReference("x", (Plain("*a*"),)),
    ]
