import pytest

from sfu_transcript.errors import FieldError
from sfu_transcript.extract import BlockKind, extract_block, extract_course, extract_transfer
from sfu_transcript.models import SourceLine


def _line(text, index=0):
    return SourceLine(index, text, index)


def test_course_with_qualifier_letter():
    rec = extract_course(_line("CMPT 376W A-"))
    assert (rec.subject, rec.course_id, rec.grade) == ("CMPT", "376W", "A-")
    assert rec.qualifier == "W"


def test_course_id_stays_a_string():
    rec = extract_course(_line("MATH 0100 B"))
    assert rec.course_id == "0100"
    assert rec.qualifier is None


def test_missing_grade_means_in_progress():
    rec = extract_course(_line("CMPT 276"))
    assert rec.grade is None
    assert rec.in_progress


def test_designation_columns_are_ignored():
    rec = extract_course(_line("HIST 102W W B-Hum Perm.Dt: 2019-04-30 A"))
    assert (rec.course_id, rec.grade) == ("102W", "A")


def test_unknown_grade_is_kept_verbatim():
    assert extract_course(_line("CMPT 225 XY")).grade == "XY"


def test_status_codes_are_grades():
    assert extract_course(_line("CMPT 225 WD")).grade == "WD"


def test_grade_with_digits_is_a_field_error():
    with pytest.raises(FieldError) as ei:
        extract_course(_line("CMPT 225 3.00", index=7))
    assert ei.value.field == "grade"
    assert ei.value.line_index == 7


def test_trailing_fields_are_a_field_error():
    with pytest.raises(FieldError) as ei:
        extract_course(_line("CMPT 225 B+ extra"))
    assert ei.value.field == "grade"


def test_malformed_course_id():
    with pytest.raises(FieldError) as ei:
        extract_course(_line("CMPT 12345 A"))
    assert ei.value.field == "courseId"


def test_malformed_subject():
    with pytest.raises(FieldError) as ei:
        extract_course(_line("cmpt 225 A"))
    assert ei.value.field == "subject"


def test_transfer_with_multi_word_institution():
    rec = extract_transfer(_line("ENGL 1XX TR Langara College"))
    assert (rec.subject, rec.course_id, rec.grade) == ("ENGL", "1XX", "TR")
    assert rec.institution == "Langara College"


def test_transfer_missing_institution():
    with pytest.raises(FieldError) as ei:
        extract_transfer(_line("CMPT 130 B"))
    assert ei.value.field == "institution"


def test_transfer_missing_grade():
    with pytest.raises(FieldError) as ei:
        extract_transfer(_line("CMPT 130"))
    assert ei.value.field == "grade"


def test_transfer_bad_grade():
    with pytest.raises(FieldError) as ei:
        extract_transfer(_line("CMPT 130 4 UBC"))
    assert ei.value.field == "grade"


def test_extract_block_dispatches_on_kind():
    lines = [_line("CMPT 130 B UBC", 1), _line("CMPT 135 TR UBC", 2)]
    recs = extract_block(lines, BlockKind.TRANSFER)
    assert [r.institution for r in recs] == ["UBC", "UBC"]
    assert [r.line_index for r in recs] == [1, 2]
    courses = extract_block([_line("CMPT 225 B-")], BlockKind.TERM)
    assert courses[0].grade == "B-"


def test_transfer_institution_keeps_designation_words():
    rec = extract_transfer(_line("CMPT 130 B Athabasca University Online"))
    assert rec.grade == "B"
    assert rec.institution == "Athabasca University Online"


def test_transfer_designations_before_grade_are_dropped():
    rec = extract_transfer(_line("CMPT 130 Q B UBC"))
    assert (rec.grade, rec.institution) == ("B", "UBC")


def test_transfer_institution_in_grade_column_is_a_field_error():
    with pytest.raises(FieldError) as ei:
        extract_transfer(_line("CMPT 130 UBC Okanagan"))
    assert ei.value.field == "grade"
    assert "UBC" in ei.value.message


@pytest.mark.parametrize("grade", ["TR", "A+", "Z", "XY"])
def test_transfer_grades_that_look_like_grades(grade):
    rec = extract_transfer(_line(f"MATH 1XX {grade} Douglas College"))
    assert (rec.grade, rec.institution) == (grade, "Douglas College")
