from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from sfu_transcript.assemble import assemble_segments
from sfu_transcript.config import ParserConfig
from sfu_transcript.emit import Row, emit_rows
from sfu_transcript.errors import TranscriptError
from sfu_transcript.models import Transcript
from sfu_transcript.normalize import normalize_lines
from sfu_transcript.pdf_text import extract_lines
from sfu_transcript.segment import segment

logger = logging.getLogger(__name__)


def parse_lines(
    raw_lines: Iterable[str], source: str = "<lines>", config: ParserConfig | None = None
) -> Transcript:
    """Normalize, segment, extract and assemble one document.

    Any :class:`TranscriptError` propagates with *source* attached; there is no
    partial result.
    """
    cfg = config or ParserConfig()
    try:
        text = normalize_lines(raw_lines, cfg.extra_drop_patterns)
        segments = segment(text)
        transcript = assemble_segments(segments, strict_order=cfg.strict_order)
    except TranscriptError as exc:
        exc.source = source
        raise
    logger.debug(
        "%s: program=%s transfers=%d terms=%d",
        source,
        transcript.program.code,
        len(transcript.transfers),
        len(transcript.terms),
    )
    return transcript


def run_file(path: Path, config: ParserConfig | None = None) -> Transcript:
    return parse_lines(extract_lines(path), source=str(path), config=config)


def rows_for_file(path: Path, anonymized_id: int, config: ParserConfig | None = None) -> list[Row]:
    return emit_rows(run_file(path, config), anonymized_id)
