"""Directory-level driver around the single-document pipeline.

Anonymized ids are fixed before any document is parsed: the inputs are
matched with a contiguous range starting at the caller's value, so workers
never coordinate on ids. Which document gets which id carries no meaning.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path

from sfu_transcript.config import ParserConfig
from sfu_transcript.emit import Row
from sfu_transcript.errors import TranscriptError
from sfu_transcript.parse_transcript import rows_for_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Failure:
    path: Path
    anonymized_id: int
    error: TranscriptError


@dataclass
class BatchResult:
    rows: list[Row] = field(default_factory=list)
    failures: list[Failure] = field(default_factory=list)
    documents: int = 0

    @property
    def ok(self) -> bool:
        return not self.failures


def discover_inputs(inputs: Iterable[Path]) -> list[Path]:
    found: list[Path] = []
    for p in inputs:
        if p.is_dir():
            found.extend(sorted(q for q in p.iterdir() if q.suffix.lower() == ".pdf"))
        else:
            found.append(p)
    return found


def allocate_ids(documents: Sequence[Path], start_id: int) -> list[tuple[int, Path]]:
    return [(start_id + i, doc) for i, doc in enumerate(documents)]


def run_batch(
    documents: Sequence[Path],
    start_id: int,
    config: ParserConfig | None = None,
    jobs: int = 1,
    keep_going: bool = False,
) -> BatchResult:
    cfg = config or ParserConfig()
    assigned = allocate_ids(documents, start_id)

    def process(item: tuple[int, Path]) -> list[Row] | TranscriptError:
        anon_id, path = item
        try:
            return rows_for_file(path, anon_id, cfg)
        except TranscriptError as exc:
            if not keep_going:
                raise
            return exc

    if jobs > 1:
        logger.info("Processing %d documents with %d workers", len(assigned), jobs)
        with ThreadPoolExecutor(max_workers=jobs) as executor:
            outcomes = list(executor.map(process, assigned))
    else:
        outcomes = [process(item) for item in assigned]

    result = BatchResult(documents=len(assigned))
    for (anon_id, path), outcome in zip(assigned, outcomes):
        if isinstance(outcome, TranscriptError):
            logger.error("%s (id %d) rejected: %s", path, anon_id, outcome)
            result.failures.append(Failure(path, anon_id, outcome))
            continue
        logger.info("%s -> id %d (%d rows)", path, anon_id, len(outcome))
        result.rows.extend(outcome)
    return result
