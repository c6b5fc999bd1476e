"""Tests for markup-to-text reduction."""

from manuscript.parsers.markup import markup_to_text


def test_block_tags_become_lines():
    html = "<h1>Title</h1><p>First paragraph.</p><p>Second <em>para</em>graph.</p>"
    assert markup_to_text(html) == "Title\n\nFirst paragraph.\n\nSecond paragraph."


def test_head_and_style_dropped():
    html = (
        "<!DOCTYPE html><html><head><title>Ignored</title>"
        "<style>p { color: red; }</style></head>"
        "<body><p>Kept</p></body></html>"
    )
    assert markup_to_text(html) == "Kept"


def test_entities_unescaped_and_whitespace_normalized():
    html = "<p>Fish &amp;   chips&nbsp;&lt;3</p>"
    assert markup_to_text(html) == "Fish & chips <3"


def test_namespaced_xml_paragraphs():
    xml = (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<sf:document xmlns:sf="urn:test"><sf:text>'
        "<sf:p>Heading</sf:p><sf:p>Body <sf:span>text</sf:span></sf:p>"
        "</sf:text></sf:document>"
    )
    assert markup_to_text(xml) == "Heading\n\nBody text"


def test_comments_removed_and_cdata_kept():
    xml = "<root><!-- note --><p><![CDATA[raw text]]></p></root>"
    assert markup_to_text(xml) == "raw text"


def test_empty_markup():
    assert markup_to_text("<root><empty/></root>") == ""
