from __future__ import annotations

import os
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace

STRICT_ORDER_ENV = "SFU_TRANSCRIPT_STRICT_ORDER"
DROP_PATTERNS_ENV = "SFU_TRANSCRIPT_DROP"
# Several patterns can be packed into one variable.
DROP_PATTERNS_SEP = ";;"


@dataclass(frozen=True)
class ParserConfig:
    """Knobs for a single document run. Shared read-only across a batch."""

    strict_order: bool = False
    extra_drop_patterns: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for pat in self.extra_drop_patterns:
            try:
                re.compile(pat)
            except re.error as exc:
                raise ValueError(f"invalid drop pattern {pat!r}: {exc}") from exc

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ParserConfig:
        env = os.environ if environ is None else environ
        strict = env.get(STRICT_ORDER_ENV, "").strip() == "1"
        raw = env.get(DROP_PATTERNS_ENV, "")
        pats = tuple(p.strip() for p in raw.split(DROP_PATTERNS_SEP) if p.strip())
        return cls(strict_order=strict, extra_drop_patterns=pats)

    def with_overrides(
        self, strict_order: bool | None = None, drop_patterns: Iterable[str] = ()
    ) -> ParserConfig:
        extra = self.extra_drop_patterns + tuple(drop_patterns)
        strict = self.strict_order if strict_order is None else strict_order
        return replace(self, strict_order=strict, extra_drop_patterns=extra)
