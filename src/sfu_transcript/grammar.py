from __future__ import annotations

import re
from enum import Enum

# ---------- Line-level patterns (normalized, single-spaced text) ----------

# "Plan: CMPTMAJ", "Program Plan CMPTMAJ" or a bare plan code.
PLAN_SUFFIXES = ("MAJ", "MIN", "HON", "JMA", "JMI", "JHO", "CER", "DIP", "EXT", "PBD", "UND")
PROGRAM_LABELLED = re.compile(r"^(?i:(?:program\s+)?plan)\s*:?\s+(?P<code>[A-Z][A-Z0-9]{2,11})$")
PROGRAM_BARE = re.compile(
    r"^(?P<code>[A-Z][A-Z0-9]{1,9}(?:" + "|".join(PLAN_SUFFIXES) + r"))$"
)

TERM_HEADER = re.compile(
    r"(?i)^(?P<year>\d{4})\s+(?P<term>spring|summer|fall)(?:\s+(?:term|semester))?$"
)
TRANSFER_HEADING = re.compile(r"(?i)^transfer\s+(?:courses|credits?)$")
LABEL_LINE = re.compile(r"(?i)^(?:program\s*:.*|beginning of undergraduate record)$")
END_MARKER = re.compile(r"(?i)^(?:total units passed by academic group|end of transcript)\b")

# Anything that starts with SUBJECT + a digit-led token is a course candidate;
# whether its fields are valid is decided later, field by field.
ENTRY_SHAPE = re.compile(r"^(?P<subject>[A-Z]{2,5})\s+(?P<course>\d\S*)(?:\s+(?P<rest>.+))?$")

# ---------- Token-level patterns ----------
SUBJECT_TOKEN = re.compile(r"^[A-Z]{2,5}$")
# 130, 376W, 1XX (unassigned transfer credit)
COURSE_ID_TOKEN = re.compile(r"^\d[0-9X]{1,3}[A-Z]?$")
# Unknown grades are kept verbatim as long as they look like a grade.
GRADE_TOKEN = re.compile(r"^[A-Za-z]{1,3}[+\-]?$")
# Transfer grades sit next to free-text institutions, so unknown ones are
# held to two letters to keep an acronym like UBC from passing as a grade.
TRANSFER_GRADE_TOKEN = re.compile(r"^[A-Za-z]{1,2}[+\-]?$")
DATE_TOKEN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

KNOWN_GRADES = frozenset(
    {
        # Standard passing grades
        "A+", "A", "A-",
        "B+", "B", "B-",
        "C+", "C", "C-",
        "D",
        "P",
        # Temporary grades
        "DE", "GN", "IP",
        # Forms of failing
        "F", "FD", "N",
        # Notations
        "AE", "AU", "CC", "CF", "CN", "CR", "FX", "NC", "WD", "WE", "TR",
    }
)

# WQB designations add columns to some rows and carry no record data.
QUALIFIER_TOKENS = {"W", "Q", "Online"}
BREADTH_TAGS = ("B-Sci", "B-Hum", "B-Soc")
PERM_DT_TOKEN = "Perm.Dt:"


class LineKind(Enum):
    PROGRAM = "program"
    TRANSFER_HEADING = "transfer-heading"
    TERM_HEADER = "term-header"
    LABEL = "label"
    ENTRY = "entry"
    END = "end"
    OTHER = "other"


def classify(text: str) -> LineKind:
    if END_MARKER.match(text):
        return LineKind.END
    if TERM_HEADER.match(text):
        return LineKind.TERM_HEADER
    if TRANSFER_HEADING.match(text):
        return LineKind.TRANSFER_HEADING
    if PROGRAM_LABELLED.match(text) or PROGRAM_BARE.match(text):
        return LineKind.PROGRAM
    if LABEL_LINE.match(text):
        return LineKind.LABEL
    if ENTRY_SHAPE.match(text):
        return LineKind.ENTRY
    return LineKind.OTHER


def starts_record(text: str) -> bool:
    """True when *text* opens a new logical line rather than continuing one."""
    return classify(text.strip()) is not LineKind.OTHER


def program_code(text: str) -> str | None:
    m = PROGRAM_LABELLED.match(text) or PROGRAM_BARE.match(text)
    return m.group("code") if m else None


def is_designation(token: str) -> bool:
    if token in QUALIFIER_TOKENS or token == PERM_DT_TOKEN:
        return True
    if any(tag in token for tag in BREADTH_TAGS):
        return True
    return DATE_TOKEN.match(token) is not None
