from __future__ import annotations

import logging
from collections.abc import Sequence

from sfu_transcript.errors import InvariantError, StructuralError
from sfu_transcript.extract import BlockKind, extract_block
from sfu_transcript.grammar import program_code
from sfu_transcript.models import (
    ProgramHeader,
    SFUCourseRecord,
    SourceLine,
    TermBlock,
    Transcript,
    TransferCourseRecord,
)
from sfu_transcript.segment import Segments

logger = logging.getLogger(__name__)


def _check_program(programs: Sequence[ProgramHeader]) -> ProgramHeader:
    if not programs:
        raise StructuralError("missing program header")
    if len(programs) > 1:
        codes = ", ".join(p.code for p in programs)
        raise InvariantError(
            f"exactly one program header expected, found {len(programs)} ({codes})",
            line_index=programs[1].line_index,
            field="program",
        )
    if not programs[0].code:
        raise InvariantError(
            "empty program code", line_index=programs[0].line_index, field="program"
        )
    return programs[0]


def _check_record(rec: SFUCourseRecord | TransferCourseRecord) -> None:
    if not rec.subject:
        raise InvariantError("record without subject", line_index=rec.line_index, field="subject")
    if not rec.course_id:
        raise InvariantError(
            "record without course id", line_index=rec.line_index, field="courseId"
        )
    if isinstance(rec, TransferCourseRecord) and not rec.institution:
        raise InvariantError(
            "transfer record without institution", line_index=rec.line_index, field="institution"
        )


def _order_warnings(terms: Sequence[TermBlock], strict: bool) -> list[str]:
    warnings: list[str] = []
    for prev, cur in zip(terms, terms[1:]):
        if cur.key >= prev.key:
            continue
        msg = f"term {cur.label} follows {prev.label}"
        if strict:
            raise StructuralError(
                f"term blocks out of chronological order: {msg}",
                line_index=cur.line_index,
                state=f"InTermBlock({cur.label})",
            )
        logger.warning("out-of-order term blocks: %s (line %d)", msg, cur.line_index)
        warnings.append(msg)
    return warnings


def assemble(
    programs: Sequence[ProgramHeader],
    transfers: Sequence[TransferCourseRecord],
    terms: Sequence[TermBlock],
    *,
    strict_order: bool = False,
) -> Transcript:
    program = _check_program(programs)
    for rec in transfers:
        _check_record(rec)
    for block in terms:
        for course in block.courses:
            _check_record(course)
    warnings = _order_warnings(terms, strict_order)
    return Transcript(program, tuple(transfers), tuple(terms), tuple(warnings))


def _program_header(line: SourceLine) -> ProgramHeader:
    return ProgramHeader(program_code(line.text) or "", line.index)


def assemble_segments(segments: Segments, *, strict_order: bool = False) -> Transcript:
    """Run the extractor over every buffered block and assemble the result."""
    programs = [_program_header(line) for line in segments.programs]
    transfers = extract_block(segments.transfers, BlockKind.TRANSFER)
    terms = [
        TermBlock(
            seg.year,
            seg.term,
            tuple(extract_block(seg.lines, BlockKind.TERM)),
            seg.header.index,
        )
        for seg in segments.terms
    ]
    return assemble(programs, transfers, terms, strict_order=strict_order)
