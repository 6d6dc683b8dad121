"""Section segmentation as an explicit finite state machine.

The segmenter only decides which section a line belongs to. It does not look
inside course lines beyond their overall shape; field validation belongs to
:mod:`sfu_transcript.extract`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum

from sfu_transcript.errors import StructuralError
from sfu_transcript.grammar import TERM_HEADER, LineKind, classify
from sfu_transcript.models import SourceLine, Term
from sfu_transcript.normalize import NormalizedText

logger = logging.getLogger(__name__)


class State(Enum):
    SEEK_PROGRAM = "SeekProgram"
    IN_TRANSFER_BLOCK = "InTransferBlock"
    IN_TERM_BLOCK = "InTermBlock"
    DONE = "Done"
    MALFORMED = "Malformed"


class Action(Enum):
    IGNORE = "ignore"
    CAPTURE_PROGRAM = "capture-program"
    BUFFER_TRANSFER = "buffer-transfer"
    OPEN_TERM = "open-term"
    BUFFER_COURSE = "buffer-course"


S, K, A = State, LineKind, Action

# (state, line kind) -> (next state, action). Pairs not listed are malformed.
TRANSITIONS: dict[tuple[State, LineKind], tuple[State, Action]] = {
    # Front matter before the plan code is skipped whatever it looks like.
    **{(S.SEEK_PROGRAM, kind): (S.SEEK_PROGRAM, A.IGNORE) for kind in LineKind},
    (S.SEEK_PROGRAM, K.PROGRAM): (S.IN_TRANSFER_BLOCK, A.CAPTURE_PROGRAM),
    (S.IN_TRANSFER_BLOCK, K.PROGRAM): (S.IN_TRANSFER_BLOCK, A.CAPTURE_PROGRAM),
    (S.IN_TRANSFER_BLOCK, K.TRANSFER_HEADING): (S.IN_TRANSFER_BLOCK, A.IGNORE),
    (S.IN_TRANSFER_BLOCK, K.LABEL): (S.IN_TRANSFER_BLOCK, A.IGNORE),
    (S.IN_TRANSFER_BLOCK, K.ENTRY): (S.IN_TRANSFER_BLOCK, A.BUFFER_TRANSFER),
    (S.IN_TRANSFER_BLOCK, K.TERM_HEADER): (S.IN_TERM_BLOCK, A.OPEN_TERM),
    (S.IN_TRANSFER_BLOCK, K.END): (S.DONE, A.IGNORE),
    (S.IN_TERM_BLOCK, K.PROGRAM): (S.IN_TERM_BLOCK, A.CAPTURE_PROGRAM),
    (S.IN_TERM_BLOCK, K.LABEL): (S.IN_TERM_BLOCK, A.IGNORE),
    (S.IN_TERM_BLOCK, K.ENTRY): (S.IN_TERM_BLOCK, A.BUFFER_COURSE),
    (S.IN_TERM_BLOCK, K.TERM_HEADER): (S.IN_TERM_BLOCK, A.OPEN_TERM),
    (S.IN_TERM_BLOCK, K.END): (S.DONE, A.IGNORE),
    **{(S.DONE, kind): (S.DONE, A.IGNORE) for kind in LineKind},
}
del S, K, A


@dataclass
class TermSegment:
    year: int
    term: Term
    header: SourceLine
    lines: list[SourceLine] = field(default_factory=list)


@dataclass
class Segments:
    programs: list[SourceLine] = field(default_factory=list)
    transfers: list[SourceLine] = field(default_factory=list)
    terms: list[TermSegment] = field(default_factory=list)


def _open_term(line: SourceLine) -> TermSegment:
    m = TERM_HEADER.match(line.text)
    if m is None:
        raise StructuralError(
            "malformed term header",
            line_index=line.index,
            origin=line.origin,
            line=line.text,
            state=State.IN_TERM_BLOCK.value,
        )
    return TermSegment(int(m.group("year")), Term.parse(m.group("term")), line)


def _state_label(state: State, out: Segments) -> str:
    if state is State.IN_TERM_BLOCK and out.terms:
        cur = out.terms[-1]
        return f"{state.value}({cur.year} {cur.term.value})"
    return state.value


def segment(text: NormalizedText | Sequence[str]) -> Segments:
    if isinstance(text, NormalizedText):
        origins: Sequence[int] = text.origins
    else:
        origins = range(len(text))
    out = Segments()
    state = State.SEEK_PROGRAM

    for idx, raw in enumerate(text):
        line = SourceLine(idx, raw, origins[idx])
        kind = classify(raw)
        nxt, action = TRANSITIONS.get((state, kind), (State.MALFORMED, Action.IGNORE))
        if nxt is State.MALFORMED:
            raise StructuralError(
                f"unexpected {kind.value} line",
                line_index=idx,
                origin=line.origin,
                line=raw,
                state=_state_label(state, out),
            )
        if action is Action.CAPTURE_PROGRAM:
            out.programs.append(line)
        elif action is Action.BUFFER_TRANSFER:
            out.transfers.append(line)
        elif action is Action.OPEN_TERM:
            out.terms.append(_open_term(line))
        elif action is Action.BUFFER_COURSE:
            out.terms[-1].lines.append(line)
        if nxt is not state:
            logger.debug("line %d: %s -> %s (%s)", idx, state.value, nxt.value, kind.value)
        state = nxt

    if state is State.SEEK_PROGRAM:
        raise StructuralError(
            "missing program header", line_index=len(text), state=state.value
        )
    return out
