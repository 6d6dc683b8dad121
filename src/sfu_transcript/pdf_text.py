from __future__ import annotations

import logging
from collections.abc import Container, Iterable
from dataclasses import dataclass
from pathlib import Path

import pdfplumber
from pdfminer.pdfdocument import PDFPasswordIncorrect
from pdfplumber.utils.exceptions import PdfminerException

from sfu_transcript.errors import DocumentError
from sfu_transcript.normalize import PAGE_BREAK

logger = logging.getLogger(__name__)

# Approximate glyph width used to turn a left offset into leading spaces.
CHAR_WIDTH = 6.0


@dataclass
class Tok:
    text: str
    x0: float
    x1: float
    y0: float
    y1: float
    page: int


@dataclass
class Row:
    page: int
    y: float
    toks: list[Tok]

    @property
    def x0(self) -> float:
        return self.toks[0].x0 if self.toks else 0.0

    @property
    def text(self) -> str:
        return " ".join(t.text for t in self.toks)


def _to_float(v: object, default: float = 0.0) -> float:
    try:
        return float(v)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default


def _word_to_tok(w: dict, page: int) -> Tok | None:  # type: ignore[type-arg]
    text = str(w.get("text") or "").strip()
    if not text:
        return None
    top = _to_float(w.get("top"))
    x0 = _to_float(w.get("x0"))
    return Tok(text, x0, _to_float(w.get("x1"), x0), top, _to_float(w.get("bottom"), top + 8.0), page)


def group_words_into_rows(words: Iterable[dict], page: int, y_tol: float = 3.0) -> list[Row]:  # type: ignore[type-arg]
    """Cluster pdfplumber words whose tops lie within *y_tol* of a row's first word."""
    toks = [t for t in (_word_to_tok(w, page) for w in words) if t is not None]
    toks.sort(key=lambda t: (t.y0, t.x0))
    rows: list[Row] = []
    for tok in toks:
        if rows and abs(tok.y0 - rows[-1].y) <= y_tol:
            rows[-1].toks.append(tok)
        else:
            rows.append(Row(page, tok.y0, [tok]))
    for row in rows:
        row.toks.sort(key=lambda t: t.x0)
    return rows


def render_rows(rows: list[Row], indent_tol: float = 12.0) -> list[str]:
    """One text line per row, indented relative to the page's left margin."""
    if not rows:
        return []
    margin = min(r.x0 for r in rows)
    lines: list[str] = []
    for r in rows:
        offset = r.x0 - margin
        pad = int(offset // CHAR_WIDTH) if offset > indent_tol else 0
        lines.append(" " * pad + r.text)
    return lines


def _read_pages(path: Path, pages: Container[int] | None, y_tol: float) -> list[str]:
    out: list[str] = []
    with pdfplumber.open(path) as pdf:
        for pidx, page in enumerate(pdf.pages, start=1):
            if pages is not None and pidx not in pages:
                continue
            rows = group_words_into_rows(page.extract_words() or [], pidx, y_tol=y_tol)
            if out:
                out.append(PAGE_BREAK)
            out.extend(render_rows(rows))
            logger.debug("%s page %d: %d rows", path, pidx, len(rows))
    return out


def extract_lines(
    path: Path, pages: Container[int] | None = None, y_tol: float = 3.0
) -> list[str]:
    """Raw text lines of *path*, pages separated by :data:`PAGE_BREAK`.

    Unreadable files, broken and password-protected PDFs surface as
    :class:`DocumentError`.
    """
    try:
        return _read_pages(path, pages, y_tol)
    except (OSError, PdfminerException, PDFPasswordIncorrect) as exc:
        raise DocumentError(f"cannot read PDF text: {exc}", source=str(path)) from exc
