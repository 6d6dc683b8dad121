"""Immutable values produced by the parsing pipeline.

Course identifiers stay strings for their whole life: ``376W`` and ``1XX``
are valid ids, so nothing here ever converts them to numbers.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

_QUALIFIER_PAT = re.compile(r"[A-Z]$")


class Term(Enum):
    SPRING = "Spring"
    SUMMER = "Summer"
    FALL = "Fall"

    @classmethod
    def parse(cls, text: str) -> Term:
        key = text.strip().capitalize()
        for term in cls:
            if term.value == key:
                return term
        raise ValueError(f"unknown term name: {text!r}")

    @property
    def ordinal(self) -> int:
        """Position within an academic year (Spring first)."""
        return list(Term).index(self)


@dataclass(frozen=True)
class SourceLine:
    """A normalized line together with where it came from."""

    index: int
    text: str
    origin: int


@dataclass(frozen=True)
class ProgramHeader:
    code: str
    line_index: int = -1


@dataclass(frozen=True)
class SFUCourseRecord:
    subject: str
    course_id: str
    grade: str | None = None
    line_index: int = -1

    @property
    def qualifier(self) -> str | None:
        """Trailing letter of the course id (``W`` in ``376W``), if any."""
        m = _QUALIFIER_PAT.search(self.course_id)
        return m.group(0) if m else None

    @property
    def in_progress(self) -> bool:
        return self.grade is None


@dataclass(frozen=True)
class TransferCourseRecord:
    subject: str
    course_id: str
    grade: str
    institution: str
    line_index: int = -1

    @property
    def qualifier(self) -> str | None:
        m = _QUALIFIER_PAT.search(self.course_id)
        return m.group(0) if m else None


@dataclass(frozen=True)
class TermBlock:
    year: int
    term: Term
    courses: tuple[SFUCourseRecord, ...] = ()
    line_index: int = -1

    @property
    def key(self) -> tuple[int, int]:
        return (self.year, self.term.ordinal)

    @property
    def label(self) -> str:
        return f"{self.year} {self.term.value}"


@dataclass(frozen=True)
class Transcript:
    program: ProgramHeader
    transfers: tuple[TransferCourseRecord, ...] = ()
    terms: tuple[TermBlock, ...] = ()
    warnings: tuple[str, ...] = field(default=(), compare=False)

    @property
    def course_count(self) -> int:
        return len(self.transfers) + sum(len(t.courses) for t in self.terms)
