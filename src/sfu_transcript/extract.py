from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum

from sfu_transcript.errors import FieldError
from sfu_transcript.grammar import (
    COURSE_ID_TOKEN,
    GRADE_TOKEN,
    KNOWN_GRADES,
    SUBJECT_TOKEN,
    TRANSFER_GRADE_TOKEN,
    is_designation,
)
from sfu_transcript.models import SFUCourseRecord, SourceLine, TransferCourseRecord

logger = logging.getLogger(__name__)


class BlockKind(Enum):
    TRANSFER = "transfer"
    TERM = "term"


def _fail(line: SourceLine, field: str, message: str) -> FieldError:
    return FieldError(
        message, line_index=line.index, origin=line.origin, line=line.text, field=field
    )


def _fields(line: SourceLine) -> list[str]:
    return [tok for tok in line.text.split() if not is_designation(tok)]


def _check_subject_course(line: SourceLine, toks: list[str]) -> tuple[str, str]:
    if not toks or not SUBJECT_TOKEN.match(toks[0]):
        raise _fail(line, "subject", "missing or malformed subject")
    if len(toks) < 2 or not COURSE_ID_TOKEN.match(toks[1]):
        got = toks[1] if len(toks) > 1 else ""
        raise _fail(line, "courseId", f"missing or malformed course id {got!r}")
    return toks[0], toks[1]


def _check_grade(line: SourceLine, tok: str) -> str:
    if tok in KNOWN_GRADES:
        return tok
    if GRADE_TOKEN.match(tok):
        logger.debug("line %d: keeping unrecognized grade %r", line.index, tok)
        return tok
    raise _fail(line, "grade", f"malformed grade token {tok!r}")


def extract_course(line: SourceLine) -> SFUCourseRecord:
    """SUBJECT ID [GRADE]; a missing grade marks an in-progress course."""
    toks = _fields(line)
    subject, course_id = _check_subject_course(line, toks)
    if len(toks) > 3:
        raise _fail(line, "grade", f"unexpected trailing fields {' '.join(toks[3:])!r}")
    grade = _check_grade(line, toks[2]) if len(toks) == 3 else None
    return SFUCourseRecord(subject, course_id, grade, line.index)


def _transfer_fields(line: SourceLine) -> tuple[list[str], str]:
    """Subject, id and grade with designations dropped, plus the untouched institution."""
    toks = line.text.split()
    head: list[str] = []
    i = 0
    while i < len(toks) and len(head) < 3:
        if not is_designation(toks[i]):
            head.append(toks[i])
        i += 1
    return head, " ".join(toks[i:])


def _check_transfer_grade(line: SourceLine, tok: str) -> str:
    # A word like UBC here means the grade column is empty and the
    # institution has shifted left.
    if tok not in KNOWN_GRADES and not TRANSFER_GRADE_TOKEN.match(tok):
        raise _fail(line, "grade", f"{tok!r} is not a transfer grade")
    return _check_grade(line, tok)


def extract_transfer(line: SourceLine) -> TransferCourseRecord:
    """SUBJECT ID GRADE INSTITUTION...; the institution may span several words."""
    head, institution = _transfer_fields(line)
    subject, course_id = _check_subject_course(line, head)
    if len(head) < 3:
        raise _fail(line, "grade", "missing transfer grade")
    grade = _check_transfer_grade(line, head[2])
    if not institution:
        raise _fail(line, "institution", "missing transfer institution")
    return TransferCourseRecord(subject, course_id, grade, institution, line.index)


def extract_block(
    lines: Iterable[SourceLine], kind: BlockKind
) -> list[SFUCourseRecord] | list[TransferCourseRecord]:
    if kind is BlockKind.TRANSFER:
        return [extract_transfer(line) for line in lines]
    return [extract_course(line) for line in lines]
