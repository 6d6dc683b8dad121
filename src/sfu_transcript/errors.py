from __future__ import annotations


class TranscriptError(Exception):
    """Base class for every fatal, per-document parse failure."""

    kind = "transcript error"

    def __init__(
        self,
        message: str,
        *,
        line_index: int | None = None,
        origin: int | None = None,
        line: str | None = None,
        state: str | None = None,
        field: str | None = None,
        source: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.line_index = line_index
        self.origin = origin
        self.line = line
        self.state = state
        self.field = field
        self.source = source

    def __str__(self) -> str:
        parts = [f"{self.kind}: {self.message}"]
        if self.source:
            parts.append(f"document={self.source}")
        if self.line_index is not None:
            where = f"line={self.line_index}"
            if self.origin is not None and self.origin != self.line_index:
                where += f" (raw line {self.origin})"
            parts.append(where)
        if self.state:
            parts.append(f"state={self.state}")
        if self.field:
            parts.append(f"field={self.field}")
        if self.line is not None:
            parts.append(f"text={self.line!r}")
        return "; ".join(parts)


class StructuralError(TranscriptError):
    """The line sequence does not follow the expected section grammar."""

    kind = "structural error"


class FieldError(TranscriptError):
    """A line has the shape of a record but one of its fields is invalid."""

    kind = "field error"


class InvariantError(TranscriptError):
    """Extraction succeeded but the assembled transcript breaks an invariant."""

    kind = "invariant error"


class DocumentError(TranscriptError):
    """The text layer could not be read from the document at all."""

    kind = "document error"
