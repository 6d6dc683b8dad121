from __future__ import annotations

import argparse
import re
import sys
from pathlib import Path
from re import Pattern

from sfu_transcript.errors import DocumentError
from sfu_transcript.grammar import classify
from sfu_transcript.normalize import PAGE_BREAK, normalize_lines
from sfu_transcript.pdf_text import extract_lines


def parse_pages_arg(p: str | None) -> set[int] | None:
    """Parse a page selection like ``1-2,4``; ``None`` means every page."""
    if not p:
        return None
    pages: set[int] = set()
    for chunk in filter(None, (c.strip() for c in p.split(","))):
        lo, sep, hi = chunk.partition("-")
        try:
            start = int(lo)
            end = int(hi) if sep else start
        except ValueError:
            raise ValueError(f"bad page selection {chunk!r}") from None
        if start < 1 or end < start:
            raise ValueError(f"bad page range {chunk!r}")
        pages.update(range(start, end + 1))
    if not pages:
        raise ValueError(f"no pages in {p!r}")
    return pages


def dump(lines: list[str], raw: bool = False, rx: Pattern[str] | None = None) -> list[str]:
    """Render *lines* the way the parser sees them, one entry per line."""
    out: list[str] = []
    if raw:
        for idx, line in enumerate(lines):
            if line == PAGE_BREAK:
                out.append("-" * 60)
                continue
            if rx and not rx.search(line):
                continue
            out.append(f"[raw {idx}] {line!r}")
        return out
    text = normalize_lines(lines)
    for idx, (line, origin) in enumerate(zip(text.lines, text.origins)):
        if rx and not rx.search(line):
            continue
        out.append(f"[{idx} raw={origin}] {classify(line).value:<16} {line}")
    return out


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="sfu-transcript-dump", description="Dump normalized transcript lines for debugging"
    )
    ap.add_argument("pdf", help="Path to PDF")
    ap.add_argument("--pages", help="Pages to include, e.g. 1-2,4", default=None)
    ap.add_argument("--grep", help="Regex to filter lines", default=None)
    ap.add_argument("--raw", action="store_true", help="Show extracted lines before normalization")
    args = ap.parse_args(argv)
    try:
        pages = parse_pages_arg(args.pages)
    except ValueError as exc:
        ap.error(str(exc))

    path = Path(args.pdf)
    if not path.exists():
        print("File not found:", path, file=sys.stderr)
        return 1

    rx: Pattern[str] | None = re.compile(args.grep, re.I) if args.grep else None
    try:
        lines = extract_lines(path, pages=pages)
    except DocumentError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    for entry in dump(lines, raw=args.raw, rx=rx):
        print(entry)
    return 0


if __name__ == "__main__":
    sys.exit(main())
