"""
Split validated company names by which ATS platform(s) they were found on.
"""

from typing import List
from dataclasses import dataclass, field


@dataclass
class ClassificationResult:
    """Mutually exclusive buckets covering every validated name once."""
    both: List[str] = field(default_factory=list)
    only_greenhouse: List[str] = field(default_factory=list)
    only_lever: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.both) + len(self.only_greenhouse) + len(self.only_lever)


def classify_platforms(greenhouse_names: List[str], lever_names: List[str]) -> ClassificationResult:
    """
    Partition names into both / only Greenhouse / only Lever.

    Inputs may contain duplicates; each output bucket is deduplicated and
    keeps first-seen order.
    """
    greenhouse = list(dict.fromkeys(greenhouse_names))
    lever = list(dict.fromkeys(lever_names))
    greenhouse_set = set(greenhouse)
    lever_set = set(lever)

    # Walk the longer list against a set built from the shorter one
    if len(greenhouse) > len(lever):
        both = [name for name in greenhouse if name in lever_set]
    else:
        both = [name for name in lever if name in greenhouse_set]

    return ClassificationResult(
        both=both,
        only_greenhouse=[name for name in greenhouse if name not in lever_set],
        only_lever=[name for name in lever if name not in greenhouse_set],
    )
