"""Tests for the heuristic section extractor."""

import pytest

from manuscript.extractor.section_extractor import (
    extract_keywords,
    extract_sections,
    first_nonblank_line,
    match_heading,
    parse_keyword_list,
    split_lines,
    split_references,
)


# ── Heading Matching ─────────────────────────────────────────────────


@pytest.mark.parametrize("line", ["Abstract", "ABSTRACT:", "abstract ", "  Abstract  "])
def test_heading_case_and_colon_tolerant(line):
    assert match_heading(line) == "abstract"


@pytest.mark.parametrize(
    "line, field",
    [
        ("Summary", "abstract"),
        ("Introduction:", "introduction"),
        ("Background", "literature_review"),
        ("Literature Review", "literature_review"),
        ("Related Work", "literature_review"),
        ("Methods Used", "methods"),
        ("METHODOLOGY", "methods"),
        ("Materials and Methods", "methods"),
        ("Results", "results"),
        ("Findings", "results"),
        ("Discussion", "discussion"),
        ("Conclusions", "conclusion"),
        ("Acknowledgements", "acknowledgments"),
        ("References", "references"),
        ("Bibliography", "references"),
        ("Appendix A", "appendix"),
    ],
)
def test_heading_vocabulary(line, field):
    assert match_heading(line) == field


@pytest.mark.parametrize("line", ["1. Introduction", "2 Methods", "3.1 Results:"])
def test_numbered_headings(line):
    assert match_heading(line) is not None


@pytest.mark.parametrize(
    "line",
    ["", "   ", "Keywords: alpha", "The results", "2019 results were strong", "Abstracts"],
)
def test_non_headings(line):
    assert match_heading(line) is None


# ── Section Partitioning ─────────────────────────────────────────────


def test_extract_basic_sections():
    lines = split_lines(
        "My Title\nAbstract\nLine one.\nLine two.\nIntroduction\nBody."
    )
    sections = extract_sections(lines)
    assert sections == {
        "abstract": "Line one.\nLine two.",
        "introduction": "Body.",
    }


def test_lines_before_first_heading_unassigned():
    sections = extract_sections(["Preamble text", "Results", "It worked."])
    assert sections == {"results": "It worked."}


def test_no_headings_yields_no_sections():
    lines = split_lines("Some research content.\nNo structure at all.")
    assert extract_sections(lines) == {}


def test_empty_section_left_unset():
    sections = extract_sections(["Abstract", "", "Introduction", "Text."])
    assert "abstract" not in sections
    assert sections["introduction"] == "Text."


def test_repeated_section_joined():
    sections = extract_sections(
        ["Results", "First batch.", "Discussion", "Talk.", "Results", "Second batch."]
    )
    assert sections["results"] == "First batch.\n\nSecond batch."
    assert sections["discussion"] == "Talk."


def test_heading_line_closes_previous_section():
    sections = extract_sections(["Methods Used", "We sampled.", "Results:", "Done."])
    assert sections["methods"] == "We sampled."
    assert sections["results"] == "Done."


def test_paragraph_breaks_preserved_inside_section():
    sections = extract_sections(["Discussion", "Para one.", "", "Para two."])
    assert sections["discussion"] == "Para one.\n\nPara two."


# ── References ───────────────────────────────────────────────────────


def test_references_become_entries():
    sections = extract_sections(
        [
            "Conclusion",
            "We are done.",
            "References",
            "[1] Smith J. A study of things.",
            "Journal of Things, 2020.",
            "[2] Doe A. Another study.",
        ]
    )
    assert sections["references"] == [
        "[1] Smith J. A study of things. Journal of Things, 2020.",
        "[2] Doe A. Another study.",
    ]


def test_split_references_apa_style():
    refs = split_references(
        ["Smith, J. (2020). First title.", "Doe, A. (2019). Second title."]
    )
    assert refs == ["Smith, J. (2020). First title.", "Doe, A. (2019). Second title."]


def test_split_references_numbered_dot_style():
    refs = split_references(["1. Alpha", "continued", "", "2. Beta"])
    assert refs == ["1. Alpha continued", "2. Beta"]


# ── Keywords ─────────────────────────────────────────────────────────


def test_keyword_line_parsed():
    assert extract_keywords(["Keywords: alpha, beta , gamma"]) == ["alpha", "beta", "gamma"]


def test_keyword_semicolons_and_empties():
    assert extract_keywords(["KEYWORDS: a; b;; c,"]) == ["a", "b", "c"]


def test_keyword_marker_mid_line():
    assert extract_keywords(["Index terms and keywords: x, y"]) == ["x", "y"]


def test_only_first_keyword_line_used():
    lines = ["Keywords: first", "Keywords: second"]
    assert extract_keywords(lines) == ["first"]


def test_no_keyword_line():
    assert extract_keywords(["Abstract", "Nothing here."]) == []


def test_parse_keyword_list_keeps_duplicates_in_order():
    assert parse_keyword_list("b, a, b") == ["b", "a", "b"]


# ── Line Helpers ─────────────────────────────────────────────────────


def test_first_nonblank_line():
    assert first_nonblank_line(["", "   ", "  Title  ", "Next"]) == "Title"


def test_first_nonblank_line_limit():
    assert first_nonblank_line(["", "", "Late title"], limit=2) is None


def test_split_lines_handles_crlf():
    assert split_lines("a\r\nb\rc\n") == ["a", "b", "c"]
