from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass

from sfu_transcript.grammar import starts_record

PAGE_BREAK = "\f"

# Footer banner is letter-spaced in the text layer; match it spacing-insensitively.
FOOTER_BANNER = re.compile(
    "^" + r"\s+".join(r"\s*".join(word) for word in ("SIMON", "FRASER", "UNIVERSITY")) + "$"
)
# Page-break tag left at the end of a row split across two pages.
PAGE_TAG = re.compile(r"\s+SFUSR\S*$")

DROP_PATTERNS = (
    re.compile(r"(?i)^page\s+\d+(?:\s+of\s+\d+)?$"),
    re.compile(r"^SFUSR\S*$"),
    re.compile(r"(?i)^(?:unofficial\s+)?transcript\s+of\s+academic\s+record\b"),
    # Column header rows repeated on every page
    re.compile(r"(?i)^(?:subject|course)\b.*\bgrade\b"),
    # Term / cumulative summary rows
    re.compile(r"(?i)^(?:term|cum|cumulative|transfer)?\s*gpa\b"),
    re.compile(r"(?i)^(?:term|cum|cumulative|transfer)\s+totals?\b"),
    re.compile(r"(?i)^academic\s+standing\b"),
)


@dataclass(frozen=True)
class NormalizedText:
    """Logical lines plus the raw-line index each one started on."""

    lines: tuple[str, ...]
    origins: tuple[int, ...]

    def __iter__(self) -> Iterator[str]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __getitem__(self, idx: int) -> str:
        return self.lines[idx]


def _normalize_text(s: str) -> str:
    s = s.replace("\xa0", " ").replace("\u202f", " ")
    s = s.replace("\u2013", "-").replace("\u2014", "-").replace("\u2212", "-")
    return s


def _collapse(s: str) -> str:
    return " ".join(s.split())


def _is_indented(raw: str) -> bool:
    return raw[:1] in (" ", "\t")


def normalize_lines(
    raw_lines: Iterable[str], extra_drop: Sequence[str] = ()
) -> NormalizedText:
    drop = DROP_PATTERNS + tuple(re.compile(p) for p in extra_drop)
    lines: list[str] = []
    origins: list[int] = []
    in_footer = False

    for idx, raw in enumerate(raw_lines):
        if raw == PAGE_BREAK:
            in_footer = False
            continue
        if in_footer:
            continue
        raw = _normalize_text(raw.rstrip("\r\n"))
        text = _collapse(PAGE_TAG.sub("", raw))
        if not text:
            continue
        if FOOTER_BANNER.match(text):
            in_footer = True
            continue
        if any(p.search(text) for p in drop):
            continue
        if lines and _is_indented(raw) and not starts_record(text):
            lines[-1] = f"{lines[-1]} {text}"
            # A joined line must not turn into something a second pass would drop.
            if FOOTER_BANNER.match(lines[-1]):
                in_footer = True
            if in_footer or any(p.search(lines[-1]) for p in drop):
                lines.pop()
                origins.pop()
            continue
        lines.append(text)
        origins.append(idx)

    return NormalizedText(tuple(lines), tuple(origins))
