"""
Discovery Cycle Runner

One cycle = prompt -> both LLM backends (concurrently) -> merge candidates
-> Greenhouse + Lever board probes (concurrently) -> classify -> write files.

DiscoveryCycle.run() is the pipeline's error boundary: it never raises.
Any failure is logged with the cycle number and recorded on the returned
CycleReport, and the next scheduler tick starts fresh.

Run counters are not global state. The caller passes RunCounters in and
gets the updated counters back on the report.

USAGE:
    from pipeline.config import load_settings
    from pipeline.cycle_runner import RunCounters, build_discovery_cycle

    cycle = build_discovery_cycle(load_settings())
    report = cycle.run(RunCounters())
    counters = report.counters
"""

import logging
import threading
from pathlib import Path
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Sequence

from pipeline.config import DiscoverySettings, PromptSettings
from pipeline.errors import UpstreamError
from pipeline.output_writer import write_classification
from pipeline.platform_classifier import ClassificationResult, classify_platforms
from pipeline.prompt_builder import build_discovery_prompt
from scrapers.common.board_probe import BoardValidationReport, BoardValidator
from scrapers.common.candidates import CompanyCandidate, FetchResult
from scrapers.gemini.gemini_candidate_fetcher import GeminiCandidateFetcher
from scrapers.greenhouse.greenhouse_board_validator import GreenhouseBoardValidator
from scrapers.lever.lever_board_validator import LeverBoardValidator
from scrapers.ollama.ollama_candidate_fetcher import OllamaCandidateFetcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunCounters:
    """Process-lifetime counters, carried from one cycle to the next."""
    cycle_count: int = 0
    total_candidates_fetched: int = 0


@dataclass
class CycleReport:
    """Everything one cycle produced, including why it stopped early."""
    counters: RunCounters
    fetch_results: List[FetchResult] = field(default_factory=list)
    greenhouse: Optional[BoardValidationReport] = None
    lever: Optional[BoardValidationReport] = None
    classification: Optional[ClassificationResult] = None
    output_paths: Dict[str, Path] = field(default_factory=dict)
    error: Optional[str] = None
    skipped: bool = False

    @property
    def succeeded(self) -> bool:
        return not self.skipped and self.error is None


class DiscoveryCycle:
    """Runs fetch -> validate -> classify -> persist, one cycle at a time."""

    def __init__(
        self,
        fetchers: Sequence,
        greenhouse_validator: BoardValidator,
        lever_validator: BoardValidator,
        output_paths: Dict[str, Path],
        prompt_settings: Optional[PromptSettings] = None
    ):
        self.fetchers = list(fetchers)
        self.greenhouse_validator = greenhouse_validator
        self.lever_validator = lever_validator
        self.output_paths = output_paths
        self.prompt_settings = prompt_settings or PromptSettings()
        self._lock = threading.Lock()

    def run(self, counters: RunCounters) -> CycleReport:
        """
        Run one cycle. Never raises.

        If a cycle is already running the call returns immediately with a
        skipped report and the counters unchanged.
        """
        if not self._lock.acquire(blocking=False):
            logger.warning(
                f"[cycle {counters.cycle_count + 1}] Previous cycle still running, skipping this tick"
            )
            return CycleReport(counters=counters, skipped=True)

        try:
            report = CycleReport(counters=replace(counters, cycle_count=counters.cycle_count + 1))
            logger.info(
                f"[cycle {report.counters.cycle_count}] starting "
                f"(total fetched so far: {counters.total_candidates_fetched})"
            )
            try:
                self._run_stages(report)
            except Exception as e:
                report.error = str(e) or type(e).__name__
                logger.exception(f"[cycle {report.counters.cycle_count}] Cycle failed: {report.error}")
            return report
        finally:
            self._lock.release()

    def _run_stages(self, report: CycleReport):
        cycle = report.counters.cycle_count
        prompt = build_discovery_prompt(settings=self.prompt_settings)

        # 1. Fetch candidates from every backend
        report.fetch_results = self.fetch_candidates(prompt)
        for result in report.fetch_results:
            if result.ok:
                logger.info(f"[cycle {cycle}] companies from {result.source}: {len(result.candidates)}")
            else:
                logger.error(f"[cycle {cycle}] {result.source} fetch failed: {result.error}")

        failed = [result for result in report.fetch_results if not result.ok]
        if failed:
            raise UpstreamError('; '.join(result.error for result in failed))

        candidates: List[CompanyCandidate] = [
            candidate
            for result in report.fetch_results
            for candidate in result.candidates
        ]
        report.counters = replace(
            report.counters,
            total_candidates_fetched=report.counters.total_candidates_fetched + len(candidates)
        )

        # 2. Probe both platforms
        names = [candidate.company_name for candidate in candidates]
        report.greenhouse, report.lever = self.validate_names(names)

        # 3. Classify
        report.classification = classify_platforms(report.greenhouse.valid, report.lever.valid)
        logger.info(f"[cycle {cycle}] companies on both platforms: {len(report.classification.both)}")
        logger.info(f"[cycle {cycle}] companies only on greenhouse: {len(report.classification.only_greenhouse)}")
        logger.info(f"[cycle {cycle}] companies only on lever: {len(report.classification.only_lever)}")

        # 4. Persist
        report.output_paths = write_classification(report.classification, self.output_paths)

    def fetch_candidates(self, prompt: str) -> List[FetchResult]:
        """Call every backend concurrently. Results keep fetcher order."""
        if not self.fetchers:
            return []

        with ThreadPoolExecutor(max_workers=len(self.fetchers)) as executor:
            futures = [executor.submit(fetch_one, fetcher, prompt) for fetcher in self.fetchers]
            return [future.result() for future in futures]

    def validate_names(self, names: List[str]):
        """Probe Greenhouse and Lever concurrently. Returns (greenhouse, lever) reports."""
        with ThreadPoolExecutor(max_workers=2) as executor:
            greenhouse = executor.submit(self.greenhouse_validator.validate_with_report, names)
            lever = executor.submit(self.lever_validator.validate_with_report, names)
            return greenhouse.result(), lever.result()


def fetch_one(fetcher, prompt: str) -> FetchResult:
    """Run one backend, turning UpstreamError into a failed FetchResult."""
    source = getattr(fetcher, 'source', type(fetcher).__name__)
    try:
        return FetchResult(source=source, candidates=fetcher.fetch(prompt))
    except UpstreamError as e:
        return FetchResult(source=source, error=str(e))


def build_discovery_cycle(settings: DiscoverySettings) -> DiscoveryCycle:
    """Wire up the real backends and validators from settings."""
    fetchers = [
        GeminiCandidateFetcher(
            api_key=settings.google_api_key,
            model=settings.gemini_model,
            search_grounding=settings.gemini_search_grounding
        ),
        OllamaCandidateFetcher(
            api_key=settings.ollama_api_key,
            model=settings.ollama_model,
            host=settings.ollama_host,
            web_search=settings.ollama_web_search,
            timeout=settings.ollama_timeout_seconds
        ),
    ]

    return DiscoveryCycle(
        fetchers=fetchers,
        greenhouse_validator=GreenhouseBoardValidator(
            max_workers=settings.probe_max_workers,
            timeout=settings.probe_timeout_seconds
        ),
        lever_validator=LeverBoardValidator(
            max_workers=settings.probe_max_workers,
            timeout=settings.probe_timeout_seconds
        ),
        output_paths=settings.output_paths(),
        prompt_settings=settings.prompt,
    )
