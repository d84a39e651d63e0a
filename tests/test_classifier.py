"""Tests for the line classifier.

Covers: blank lines, comments, metadata directives (known and unknown),
interactions with and without messages, arrow variants, split-arrow fragments.
"""
from __future__ import annotations

import pytest

from pretty_seq.classifier import classify, classify_lines, is_interaction, split_lines
from pretty_seq.types import Metadata


# ============================================================================
# Blank lines and comments
# ============================================================================


class TestEmptyAndComment:
    @pytest.mark.parametrize("text", ["", "   ", "\t", " \t  "])
    def test_blank_and_whitespace_only_lines_are_empty(self, text):
        assert classify(text).kind == "empty"

    def test_hash_prefix_is_a_comment(self):
        assert classify("# note").kind == "comment"

    def test_indented_comment_is_a_comment(self):
        assert classify("    # diagram").kind == "comment"

    def test_comment_containing_an_arrow_is_still_a_comment(self):
        line = classify("# {AMPS} -> Client: x")
        assert line.kind == "comment"
        assert line.from_name is None


# ============================================================================
# Metadata
# ============================================================================


class TestMetadata:
    def test_title(self):
        line = classify(":title Test")
        assert line.kind == "metadata"
        assert line.metadata == Metadata(kind="title", value="Test", directive=":title")

    def test_surrounding_and_inner_whitespace_is_trimmed(self):
        line = classify("  :title   Test  ")
        assert line.metadata.kind == "title"
        assert line.metadata.value == "Test"

    def test_title_keeps_inner_spaces(self):
        line = classify(":title Example Sequence Diagram")
        assert line.metadata.value == "Example Sequence Diagram"

    @pytest.mark.parametrize(
        "text,kind,value",
        [
            (":theme nord", "theme", "nord"),
            (":author Mr. Sequence Diagram", "author", "Mr. Sequence Diagram"),
            (":date 2021-06-01", "date", "2021-06-01"),
        ],
    )
    def test_known_directives(self, text, kind, value):
        line = classify(text)
        assert line.kind == "metadata"
        assert line.metadata.kind == kind
        assert line.metadata.value == value

    def test_directive_without_value_is_still_metadata(self):
        line = classify(":date")
        assert line.kind == "metadata"
        assert line.metadata.kind == "date"
        assert line.metadata.value == ""

    def test_unknown_directive_is_invalid_metadata_not_invalid_line(self):
        line = classify(":colour red")
        assert line.kind == "metadata"
        assert line.metadata.kind == "invalid"
        assert line.metadata.directive == ":colour"
        assert line.is_issue

    def test_metadata_with_arrow_is_not_an_interaction(self):
        line = classify(":title A -> B")
        assert line.kind == "metadata"
        assert line.metadata.value == "A -> B"


# ============================================================================
# Interactions
# ============================================================================


class TestInteractions:
    def test_interaction_with_message(self):
        line = classify("Client -> Server: Message")
        assert line.kind == "interaction_with_message"
        assert line.from_name == "Client"
        assert line.to_name == "Server"
        assert line.message == "Message"

    def test_interaction_without_message(self):
        line = classify("Server -> Database")
        assert line.kind == "interaction"
        assert line.from_name == "Server"
        assert line.to_name == "Database"
        assert line.message is None

    def test_multi_word_names_and_message(self):
        line = classify("One more -> Two more: Multi words")
        assert line.from_name == "One more"
        assert line.to_name == "Two more"
        assert line.message == "Multi words"

    def test_text_without_colon_belongs_to_the_target_name(self):
        line = classify("One -> Two Do the kung fu")
        assert line.kind == "interaction"
        assert line.to_name == "Two Do the kung fu"

    def test_empty_message_after_colon_is_a_plain_interaction(self):
        line = classify("A -> B:   ")
        assert line.kind == "interaction"
        assert line.message is None

    def test_message_keeps_later_colons(self):
        line = classify("A -> B: at 10:30")
        assert line.message == "at 10:30"

    @pytest.mark.parametrize("arrow", ["->", "-->", "->>", "-->>", "--->>>"])
    def test_arrow_variants_are_accepted_uniformly(self, arrow):
        line = classify(f"A {arrow} B: hi")
        assert line.kind == "interaction_with_message"
        assert (line.from_name, line.to_name, line.message) == ("A", "B", "hi")

    def test_arrow_without_surrounding_spaces(self):
        line = classify("A->B")
        assert (line.from_name, line.to_name) == ("A", "B")

    def test_hyphenated_names(self):
        line = classify("web-app -> auth-service: login")
        assert line.from_name == "web-app"
        assert line.to_name == "auth-service"

    def test_self_reference(self):
        line = classify("A -> A: Ping")
        assert line.from_name == line.to_name == "A"

    def test_raw_text_is_kept_verbatim(self):
        line = classify("    Client -> Server: Message", 7)
        assert line.raw_text == "    Client -> Server: Message"
        assert line.line_number == 7


# ============================================================================
# Invalid lines
# ============================================================================


class TestInvalid:
    def test_continuation_fragment_is_invalid(self):
        assert classify("-> Server: X").kind == "invalid"

    def test_arrow_without_target_is_invalid(self):
        assert classify("Four ->").kind == "invalid"

    def test_plain_text_is_invalid(self):
        line = classify("Server")
        assert line.kind == "invalid"
        assert line.is_issue

    def test_dash_without_head_is_not_an_arrow(self):
        assert classify("A - B").kind == "invalid"

    def test_split_arrow_fragments_classify_independently(self):
        lines = classify_lines(
            [
                "    Client -> Server: Message",
                "    Server",
                "    -> Server: Response",
            ]
        )
        assert [l.line_number for l in lines] == [0, 1, 2]
        assert lines[0].kind == "interaction_with_message"
        assert lines[1].kind == "invalid"
        assert lines[2].kind == "invalid"


# ============================================================================
# Helpers
# ============================================================================


class TestHelpers:
    def test_split_lines_keeps_blank_lines(self):
        assert split_lines("a\n\nb\n") == ["a", "", "b"]

    def test_classify_lines_numbers_from_zero(self):
        lines = classify_lines(["", ":title Test", "A -> B"])
        assert [l.kind for l in lines] == ["empty", "metadata", "interaction"]
        assert [l.line_number for l in lines] == [0, 1, 2]

    def test_is_interaction_selects_only_interaction_kinds(self):
        lines = classify_lines(["", "# c", ":title t", "A -> B", "A -> B: m", "junk"])
        assert [is_interaction(l) for l in lines] == [
            False, False, False, True, True, False,
        ]
