import pytest

from sfu_transcript.errors import StructuralError
from sfu_transcript.grammar import LineKind
from sfu_transcript.models import Term
from sfu_transcript.normalize import normalize_lines
from sfu_transcript.segment import TRANSITIONS, State, segment


def test_segments_program_transfers_and_terms():
    seg = segment(["CMPTMAJ", "CMPT 130 B UBC", "2017 Summer", "CMPT 225 B-", "2017 Fall"])
    assert [p.text for p in seg.programs] == ["CMPTMAJ"]
    assert [t.text for t in seg.transfers] == ["CMPT 130 B UBC"]
    assert [(t.year, t.term) for t in seg.terms] == [(2017, Term.SUMMER), (2017, Term.FALL)]
    assert [line.text for line in seg.terms[0].lines] == ["CMPT 225 B-"]
    assert seg.terms[1].lines == []


def test_front_matter_before_program_is_ignored():
    seg = segment(
        ["Simon Fraser University", "Student: Jane Doe", "CMPT 999 A", "Plan: CMPTMAJ", "2018 Fall"]
    )
    assert [p.index for p in seg.programs] == [3]
    assert seg.transfers == []


def test_missing_program_header():
    with pytest.raises(StructuralError) as ei:
        segment(["2017 Summer", "CMPT 225 B-"])
    assert "missing program header" in str(ei.value)
    assert ei.value.state == "SeekProgram"


def test_stray_line_in_term_block_names_index_and_state():
    with pytest.raises(StructuralError) as ei:
        segment(["CMPTMAJ", "2017 Summer", "CMPT 225 B-", "Official signature here"])
    err = ei.value
    assert err.line_index == 3
    assert err.state == "InTermBlock(2017 Summer)"
    assert err.line == "Official signature here"


def test_stray_line_in_transfer_block():
    with pytest.raises(StructuralError) as ei:
        segment(["CMPTMAJ", "Something unexpected", "2017 Summer"])
    assert ei.value.line_index == 1
    assert ei.value.state == "InTransferBlock"


def test_transfer_heading_after_terms_is_malformed():
    with pytest.raises(StructuralError):
        segment(["CMPTMAJ", "2017 Summer", "TRANSFER COURSES"])


def test_end_marker_stops_scanning():
    seg = segment(
        [
            "CMPTMAJ",
            "2017 Summer",
            "CMPT 225 B-",
            "TOTAL UNITS PASSED BY ACADEMIC GROUP",
            "Applied Sciences 12.00",
            "2018 Fall",
        ]
    )
    assert len(seg.terms) == 1


def test_labels_are_acknowledged():
    seg = segment(["CMPTMAJ", "TRANSFER COURSES", "Program: Bachelor of Science", "2019 Fall"])
    assert seg.transfers == []
    assert len(seg.terms) == 1


def test_repeated_program_header_is_collected():
    seg = segment(["CMPTMAJ", "2017 Summer", "MATHMIN"])
    assert [p.text for p in seg.programs] == ["CMPTMAJ", "MATHMIN"]


def test_origins_come_from_normalized_text():
    text = normalize_lines(["", "CMPTMAJ", "", "2017 Summer", "junk line"])
    with pytest.raises(StructuralError) as ei:
        segment(text)
    assert ei.value.line_index == 2
    assert ei.value.origin == 4


def test_transition_table_shape():
    for kind in LineKind:
        assert (State.SEEK_PROGRAM, kind) in TRANSITIONS
        assert TRANSITIONS[(State.DONE, kind)][0] is State.DONE
        assert (State.IN_TERM_BLOCK, kind) in TRANSITIONS or kind in (
            LineKind.OTHER,
            LineKind.TRANSFER_HEADING,
        )
    assert not any(state is State.MALFORMED for state, _ in TRANSITIONS)


def test_open_term_rejects_non_header_line():
    from sfu_transcript.models import SourceLine
    from sfu_transcript.segment import _open_term

    with pytest.raises(StructuralError) as ei:
        _open_term(SourceLine(4, "CMPT 120 A", 9))
    assert ei.value.line_index == 4
    assert ei.value.origin == 9
    assert "term header" in ei.value.message
