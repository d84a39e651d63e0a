"""Pipeline tests -- parse_diagram end to end, without rendering."""
from __future__ import annotations

import logging

import pytest

from pretty_seq import parse_diagram
from pretty_seq.classifier import classify_lines
from pretty_seq.diagram import build_diagram, collect_header
from pretty_seq.errors import TextMeasurementError
from pretty_seq.types import Header, LayoutOptions

FIXTURE = """\
:theme nord
:title Test
:author Someone
:date

# diagram
Client -> Server: Message
Server -> Database: Query
Server -> Client
"""


class TestParseDiagram:
    def test_fixture(self, measurer):
        d = parse_diagram(FIXTURE, measurer)
        assert [(p.name, p.appearance_index, p.active_from, p.active_to) for p in d.participants] == [
            ("Client", 0, 0, 2),
            ("Server", 1, 0, 2),
            ("Database", 2, 1, 1),
        ]
        assert [(i.sequence_index, i.direction, i.message) for i in d.interactions] == [
            (0, "L2R", "Message"),
            (1, "L2R", "Query"),
            (2, "R2L", None),
        ]
        assert (d.canvas_width, d.canvas_height) == (360.0, 240.0)
        assert d.row_height == 40.0

    def test_accepts_pre_split_lines(self, measurer):
        from_text = parse_diagram(FIXTURE, measurer)
        from_lines = parse_diagram(FIXTURE.splitlines(), measurer)
        assert from_text == from_lines

    def test_default_measurer(self):
        d = parse_diagram("A -> B: hi")
        assert len(d.participants) == 2
        assert all(p.label_width > 0 for p in d.participants)

    def test_empty_input(self):
        d = parse_diagram("")
        assert d.participants == ()
        assert d.interactions == ()
        assert (d.canvas_width, d.canvas_height) == (50, 50)

    def test_options_are_carried_on_the_diagram(self, measurer):
        options = LayoutOptions(vertical_gap=70)
        d = parse_diagram("A -> B", measurer, options)
        assert d.options is options
        assert d.canvas_height == 50 + 40 + 70

    def test_interaction_y(self, measurer):
        d = parse_diagram("A -> B\nB -> A", measurer)
        assert d.interaction_y(0) == 25 + 40
        assert d.interaction_y(1) == 25 + 40 + 50

    def test_participant_lookup(self, measurer):
        d = parse_diagram("A -> B", measurer)
        assert d.participant("B").appearance_index == 1
        assert d.participant("missing") is None


class TestDeterminism:
    def test_identical_input_gives_identical_diagrams(self, measurer):
        text = "C -> B: x\nB -> A\nA -> C: y\nD -> D"
        first = parse_diagram(text, measurer)
        second = parse_diagram(text, measurer)
        assert first == second
        assert repr(first) == repr(second)

    def test_diagram_is_immutable(self, measurer):
        d = parse_diagram("A -> B", measurer)
        with pytest.raises(AttributeError):
            d.canvas_width = 1  # type: ignore[misc]
        with pytest.raises(AttributeError):
            d.participants[0].x_position = 1  # type: ignore[misc]


class TestHeader:
    def test_header_from_metadata(self, measurer):
        d = parse_diagram(FIXTURE, measurer)
        assert d.header == Header(title="Test", author="Someone", date=None, theme="nord")

    def test_later_directive_wins(self):
        header = collect_header(classify_lines([":title One", ":title Two"]))
        assert header.title == "Two"

    def test_unknown_directives_do_not_reach_the_header(self):
        header = collect_header(classify_lines([":subtitle x"]))
        assert header == Header()


class TestIssues:
    def test_invalid_lines_and_unknown_metadata_are_collected(self, measurer):
        text = "A -> B\nServer\n-> Server: Response\n:colour red\n# fine"
        d = parse_diagram(text, measurer)
        assert [(l.line_number, l.kind) for l in d.issues] == [
            (1, "invalid"),
            (2, "invalid"),
            (3, "metadata"),
        ]
        # Parsing carried on past the bad lines
        assert len(d.interactions) == 1

    def test_issues_are_logged_as_warnings(self, measurer, caplog):
        with caplog.at_level(logging.WARNING, logger="pretty_seq"):
            parse_diagram("A -> B\nnonsense", measurer)
        assert any("nonsense" in r.getMessage() for r in caplog.records)

    def test_measurement_failure_aborts_the_parse(self):
        class Broken:
            def measure(self, text, font_size):
                raise TextMeasurementError(text, "unmappable glyph")

        with pytest.raises(TextMeasurementError):
            build_diagram(classify_lines(["A -> B"]), Broken())
