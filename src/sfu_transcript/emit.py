from __future__ import annotations

import csv
from collections.abc import Iterable
from typing import NamedTuple, TextIO

from sfu_transcript.models import Transcript

HEADER = (
    "AnonymizedID",
    "Program",
    "Year",
    "Term",
    "Subject",
    "CourseID",
    "Grade",
    "TransferInstitution",
)


class Row(NamedTuple):
    anonymized_id: int
    program: str
    year: str
    term: str
    subject: str
    course_id: str
    grade: str
    transfer_institution: str

    @property
    def is_transfer(self) -> bool:
        return bool(self.transfer_institution)


def emit_rows(transcript: Transcript, anonymized_id: int) -> list[Row]:
    """Flatten *transcript*: every transfer row first, then term rows in document order."""
    program = transcript.program.code
    rows = [
        Row(anonymized_id, program, "", "", t.subject, t.course_id, t.grade, t.institution)
        for t in transcript.transfers
    ]
    for block in transcript.terms:
        for c in block.courses:
            rows.append(
                Row(
                    anonymized_id,
                    program,
                    str(block.year),
                    block.term.value,
                    c.subject,
                    c.course_id,
                    c.grade or "",
                    "",
                )
            )
    return rows


def write_csv(rows: Iterable[Row], stream: TextIO, header: bool = True) -> int:
    writer = csv.writer(stream, lineterminator="\n")
    if header:
        writer.writerow(HEADER)
    n = 0
    for row in rows:
        writer.writerow(row)
        n += 1
    return n
