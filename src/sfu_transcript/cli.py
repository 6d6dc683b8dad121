from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from sfu_transcript.batch import discover_inputs, run_batch
from sfu_transcript.config import ParserConfig
from sfu_transcript.emit import write_csv
from sfu_transcript.errors import TranscriptError

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sfu-transcript",
        description="Convert SFU transcript PDFs into anonymized long-form CSV rows",
    )
    parser.add_argument("inputs", nargs="+", help="PDF file(s) or directories of PDFs")
    parser.add_argument(
        "--start-id",
        "--newid",
        dest="start_id",
        type=int,
        required=True,
        help="Anonymized id of the first document; later documents count up from it",
    )
    parser.add_argument("--out", default=None, help="CSV output path (default: stdout)")
    parser.add_argument("--no-header", action="store_true", help="Do not write the CSV header row")
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Report rejected documents and continue with the rest of the batch",
    )
    parser.add_argument("--jobs", type=int, default=1, help="Documents parsed concurrently")
    parser.add_argument(
        "--strict-order",
        action="store_true",
        default=None,
        help="Reject transcripts whose terms are out of chronological order",
    )
    parser.add_argument(
        "--drop",
        action="append",
        default=[],
        metavar="REGEX",
        help="Extra pattern for lines to discard during normalization (repeatable)",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv if argv is not None else sys.argv[1:])
    _configure_logging(args.verbose)

    if args.jobs < 1:
        parser.error("--jobs must be at least 1")
    try:
        config = ParserConfig.from_env().with_overrides(args.strict_order, args.drop)
    except ValueError as exc:
        parser.error(str(exc))

    documents = discover_inputs(Path(p) for p in args.inputs)
    if not documents:
        logger.error("No input documents found")
        return 1

    try:
        result = run_batch(
            documents, args.start_id, config=config, jobs=args.jobs, keep_going=args.keep_going
        )
    except TranscriptError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    if args.out:
        with open(args.out, "w", newline="", encoding="utf-8") as fh:
            n = write_csv(result.rows, fh, header=not args.no_header)
        logger.info("Wrote %d rows to %s", n, args.out)
    else:
        write_csv(result.rows, sys.stdout, header=not args.no_header)

    for failure in result.failures:
        print(f"error: {failure.error}", file=sys.stderr)
    logger.info(
        "Parsed %d of %d documents (ids %d-%d)",
        result.documents - len(result.failures),
        result.documents,
        args.start_id,
        args.start_id + result.documents - 1,
    )
    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
