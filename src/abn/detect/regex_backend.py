"""
Find valid ABNs inside free text.

What this does
--------------
- Loads YAML "rule packs" that describe ABN-shaped digit patterns.
- Runs the compiled patterns over the text.
- Gates every match through `abn.validate`; only real ABNs become `Span`s.

Why regex first?
----------------
Any 11-digit run looks like an ABN. The regex finds candidates in the usual
layouts (with or without spaces) and the checksum throws out the rest, which is
fast and explainable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple
import logging
import re
import yaml
from importlib import resources

from ..core import validate

logger = logging.getLogger(__name__)

_RULESET_PACKAGE = "abn.detect.rulesets"


# ---- Data model returned to callers ------------------------------------------------------

@dataclass
class Span:
    """
    A valid ABN found in text.

    Attributes:
        start: Start character offset (inclusive).
        end:   End character offset (exclusive).
        text:  Raw matched text slice.
        type:  Rule name that matched ('ABN' or 'ABN_GROUP').
        canonical: The ABN in canonical layout.
    """
    start: int
    end: int
    text: str
    type: str
    canonical: str


# ---- Backend -----------------------------------------------------------------------------

class RegexBackend:
    """
    Load rule packs and run compiled regex against input text.

    Rule packs live under `abn/detect/rulesets/`. Each rule can specify:
      - regex:  the pattern string
      - flags:  optional list of flags ["I", "M", "S"]
      - group:  true if the rule matches the 14-digit group form
      - type:   override the emitted type (defaults to YAML key)
    """

    def __init__(self, rulesets: Sequence[str] = ("abn.yaml",), allow_group: bool = True) -> None:
        self.allow_group = allow_group
        self.rules: List[Tuple[str, re.Pattern, Dict[str, Any]]] = []

        for fname in rulesets:
            text = resources.files(_RULESET_PACKAGE).joinpath(fname).read_text()
            data = yaml.safe_load(text) or {}
            for key, spec in (data.get("patterns", {}) or {}).items():
                compiled = self._compile_rule(key, spec)
                if compiled is None:
                    logger.warning("Skipping malformed rule %s in %s", key, fname)
                    continue
                if compiled[2]["group"] and not allow_group:
                    continue
                self.rules.append(compiled)

    # -- Compilation helpers ----------------------------------------------------------------

    @staticmethod
    def _compile_rule(key: str, spec: Any) -> Optional[Tuple[str, re.Pattern, Dict[str, Any]]]:
        """
        Turn a YAML rule into a compiled regex and a metadata dict.

        Supports two YAML shapes:
          1) simple string  -> the regex, no flags
          2) dict           -> full options (regex/flags/group/type)
        """
        if isinstance(spec, str):
            return key, re.compile(spec), {"type": key, "group": False}

        if not isinstance(spec, dict) or "regex" not in spec:
            return None

        flags = 0
        for f in spec.get("flags", []):
            if f == "I":
                flags |= re.I
            elif f == "M":
                flags |= re.M
            elif f == "S":
                flags |= re.S

        meta = {
            "type": spec.get("type", key),
            "group": bool(spec.get("group", False)),
        }
        return key, re.compile(spec["regex"], flags), meta

    # -- Public API -------------------------------------------------------------------------

    def detect(self, text: str) -> List[Span]:
        """
        Return every valid ABN in `text`, ordered by position.

        Order of operations per match:
          1) regex match -> raw substring
          2) validate    -> checksum etc.; drop the candidate on failure
          3) merge       -> overlapping hits keep the longest (group form wins)
        """
        spans: List[Span] = []

        for _, pat, meta in self.rules:
            for m in pat.finditer(text):
                raw = m.group(0)
                result = validate(raw, allow_group=self.allow_group)
                if not result:
                    continue
                spans.append(Span(m.start(), m.end(), raw, meta["type"], result.canonical))

        merged = self._merge(spans)
        logger.info("Found %d ABN(s) in %d characters", len(merged), len(text))
        return merged

    @staticmethod
    def _merge(spans: List[Span]) -> List[Span]:
        """Drop spans that overlap a longer (or earlier, equally long) span."""
        kept: List[Span] = []
        for s in sorted(spans, key=lambda s: (-(s.end - s.start), s.start)):
            if any(not (s.end <= k.start or k.end <= s.start) for k in kept):
                continue
            kept.append(s)
        return sorted(kept, key=lambda s: s.start)
