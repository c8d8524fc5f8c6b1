"""
Validate many candidate ABNs at once (lists, lines of a file, directory trees).
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional
import logging

from ..config import AbnConfig
from ..core import Result, validate

logger = logging.getLogger(__name__)


@dataclass
class Entry:
    """One checked value and where it came from."""
    source: str
    line: Optional[int]
    raw: str
    result: Result


@dataclass
class BatchResult:
    entries: List[Entry] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.entries)

    @property
    def valid(self) -> int:
        return sum(1 for e in self.entries if e.result.ok)

    @property
    def invalid(self) -> int:
        return self.total - self.valid

    @property
    def reasons(self) -> Dict[str, int]:
        """Count of failures per reason code."""
        return dict(Counter(e.result.reason.value for e in self.entries if not e.result.ok))

    def extend(self, other: "BatchResult") -> None:
        self.entries.extend(other.entries)


class BatchValidator:
    """
    Runs `validate` over many values with the options from an `AbnConfig`.
    """

    def __init__(self, cfg: Optional[AbnConfig] = None) -> None:
        self.cfg = cfg or AbnConfig()

    # ---------------- Public API ----------------

    def check(self, raw: object) -> Result:
        return validate(raw, allow_group=self.cfg.group.enabled)

    def check_values(self, values: Iterable[str], source: str = "<values>") -> BatchResult:
        """Validate each value as given; no lines are skipped."""
        result = BatchResult()
        for v in values:
            result.entries.append(Entry(source, None, v, self.check(v)))
        return result

    def check_lines(self, lines: Iterable[str], source: str = "<stdin>") -> BatchResult:
        """Validate one ABN per line; blank lines are skipped, numbering is 1-based."""
        result = BatchResult()
        for lineno, line in enumerate(lines, start=1):
            value = line.rstrip("\r\n")
            if not value.strip():
                continue
            result.entries.append(Entry(source, lineno, value, self.check(value)))
        return result

    def check_path(self, src: Path) -> BatchResult:
        """
        Validate every line of a file, or of every file under a directory.

        Undecodable bytes become U+FFFD, so their line is rejected as InvalidCharacters.
        """
        result = BatchResult()
        for p in self._iter_files(src):
            text = p.read_text(encoding="utf-8", errors="replace")
            result.extend(self.check_lines(text.splitlines(), source=str(p)))
        logger.info("Checked %d value(s) under %s: %d invalid", result.total, src, result.invalid)
        return result

    # --------------- Internals ------------------

    @staticmethod
    def _iter_files(src: Path) -> Iterable[Path]:
        if src.is_file():
            yield src
            return
        for p in sorted(src.rglob("*")):
            if p.is_file():
                yield p
