"""
Job board existence probes shared by the Greenhouse and Lever validators.

A board exists when GET <url_template with name> returns 2xx. Anything else
(4xx, 5xx, timeout, connection error) means "not present" for this cycle.
No retries, no backoff.

Probes run on a thread pool capped at max_workers. Results come back in
completion order, not input order.

USAGE:
    from scrapers.common.board_probe import BoardValidator

    validator = BoardValidator('lever', 'https://api.lever.co/v0/postings/{name}?mode=json')
    valid_names = validator.validate(['figma', 'notarealco'])
"""

import logging
import requests
from urllib.parse import quote
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

USER_AGENT = 'ats-board-discovery/1.0'
DEFAULT_MAX_WORKERS = 20
DEFAULT_TIMEOUT = 15  # seconds


@dataclass
class ProbeResult:
    """Outcome of probing one name against one platform."""
    name: str
    exists: bool
    status_code: Optional[int] = None
    error: Optional[str] = None


@dataclass
class BoardValidationReport:
    """All probe outcomes for one platform in one cycle."""
    platform: str
    valid: List[str] = field(default_factory=list)
    probes: List[ProbeResult] = field(default_factory=list)

    @property
    def not_found(self) -> int:
        """Probes that got a 4xx (board does not exist)."""
        return sum(
            1 for p in self.probes
            if not p.exists and p.status_code is not None and 400 <= p.status_code < 500
        )

    @property
    def failed(self) -> int:
        """Probes that hit a network error, timeout or 5xx."""
        return sum(1 for p in self.probes if not p.exists) - self.not_found


def build_board_url(url_template: str, name: str) -> str:
    """Interpolate name into the template as a single quoted path segment."""
    return url_template.format(name=quote(name, safe=''))


def probe_board(name: str, url_template: str, timeout: float = DEFAULT_TIMEOUT) -> ProbeResult:
    """GET the board URL for name. Never raises."""
    url = build_board_url(url_template, name)
    headers = {'User-Agent': USER_AGENT, 'Accept': 'application/json'}

    try:
        response = requests.get(url, headers=headers, timeout=timeout)
    except requests.exceptions.Timeout:
        return ProbeResult(name=name, exists=False, error='timeout')
    except requests.exceptions.RequestException as e:
        return ProbeResult(name=name, exists=False, error=str(e)[:100])

    status_code = response.status_code
    if 200 <= status_code < 300:
        return ProbeResult(name=name, exists=True, status_code=status_code)
    return ProbeResult(name=name, exists=False, status_code=status_code, error=f"HTTP {status_code}")


class BoardValidator:
    """Concurrent existence checks against one platform's public board API."""

    def __init__(
        self,
        platform: str,
        url_template: str,
        max_workers: int = DEFAULT_MAX_WORKERS,
        timeout: float = DEFAULT_TIMEOUT
    ):
        self.platform = platform
        self.url_template = url_template
        self.max_workers = max(1, max_workers)
        self.timeout = timeout

    def validate_with_report(self, names: List[str]) -> BoardValidationReport:
        """Probe every distinct name and return the full report."""
        report = BoardValidationReport(platform=self.platform)
        unique_names = list(dict.fromkeys(names))
        if not unique_names:
            return report

        workers = min(self.max_workers, len(unique_names))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = {
                executor.submit(probe_board, name, self.url_template, self.timeout): name
                for name in unique_names
            }
            for future in as_completed(futures):
                result = future.result()
                report.probes.append(result)
                if result.exists:
                    report.valid.append(result.name)
                    logger.debug(f"  [{self.platform}] [OK] {result.name}")
                else:
                    logger.debug(f"  [{self.platform}] [XX] {result.name} ({result.error})")

        logger.info(
            f"[{self.platform}] {len(report.valid)}/{len(unique_names)} boards found "
            f"({report.not_found} not found, {report.failed} failed)"
        )
        return report

    def validate(self, names: List[str]) -> List[str]:
        """Return the names whose board exists on this platform."""
        return self.validate_with_report(names).valid
