"""
Candidate company records returned by the generative backends.

Both fetchers hand raw model text to parse_candidates(), which:
- optionally strips a Markdown code fence wrapper (```json ... ```)
- parses the JSON
- checks the top level is an array (else UpstreamError)
- keeps entries with non-empty string company_name / registered_name,
  logging and dropping anything else

USAGE:
    from scrapers.common.candidates import parse_candidates

    candidates = parse_candidates(response_text, source='gemini', strip_fences=True)
"""

import re
import json
import logging
from typing import Any, List, Optional
from dataclasses import dataclass, field

from pipeline.errors import UpstreamError

logger = logging.getLogger(__name__)

# Leading fence with optional language tag, or the trailing fence
CODE_FENCE_PATTERN = re.compile(r'^\s*```[\w-]*[ \t]*\r?\n?|\r?\n?[ \t]*```\s*$')


REQUIRED_FIELDS = ('company_name', 'registered_name')


@dataclass
class CompanyCandidate:
    """A company proposed by a model, not yet confirmed on any job board."""
    company_name: str
    registered_name: str


@dataclass
class FetchResult:
    """Outcome of one backend fetch: candidates on success, error message on failure."""
    source: str
    candidates: List[CompanyCandidate] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def strip_code_fences(text: str) -> str:
    """Remove a wrapping Markdown code fence and surrounding whitespace."""
    if not text:
        return ""
    return CODE_FENCE_PATTERN.sub('', text).strip()


def validate_candidate(entry: Any) -> Optional[CompanyCandidate]:
    """
    Convert one parsed JSON entry into a CompanyCandidate.

    Returns None if the entry is not an object or a required field is
    missing, not a string, or blank.
    """
    if not isinstance(entry, dict):
        return None

    values = []
    for key in REQUIRED_FIELDS:
        value = entry.get(key)
        if not isinstance(value, str) or not value.strip():
            return None
        values.append(value.strip())

    return CompanyCandidate(company_name=values[0], registered_name=values[1])


def parse_candidates(text: Optional[str], source: str, strip_fences: bool = False) -> List[CompanyCandidate]:
    """
    Parse model output into candidates.

    Args:
        text: Raw response text
        source: Backend name, used in errors and logs
        strip_fences: Remove Markdown code fences before parsing

    Returns:
        Valid candidates, in response order

    Raises:
        UpstreamError: empty response, invalid JSON, or top level not an array
    """
    if text is None:
        raise UpstreamError("Empty response", source=source)

    cleaned = strip_code_fences(text) if strip_fences else text
    if not cleaned.strip():
        raise UpstreamError("Empty response", source=source)

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as e:
        preview = cleaned[:200].replace('\n', ' ')
        raise UpstreamError(f"Response is not valid JSON ({e}): {preview}", source=source) from e

    if not isinstance(parsed, list):
        raise UpstreamError(f"Expected a JSON array, got {type(parsed).__name__}", source=source)

    candidates = []
    rejected = 0
    for entry in parsed:
        candidate = validate_candidate(entry)
        if candidate is None:
            rejected += 1
            logger.warning(f"[{source}] Rejected malformed candidate: {str(entry)[:120]}")
            continue
        candidates.append(candidate)

    if rejected:
        logger.warning(f"[{source}] {rejected}/{len(parsed)} entries failed shape validation")

    return candidates
