"""
Fixed-interval scheduler for discovery cycles.

Uses APScheduler's BlockingScheduler with max_instances=1 and coalesce=True,
so a slow cycle makes later ticks skip rather than overlap (two cycles
writing the same output files at once).
"""

import logging
from datetime import datetime

from apscheduler.schedulers.blocking import BlockingScheduler

from pipeline.cycle_runner import CycleReport, DiscoveryCycle, RunCounters

logger = logging.getLogger(__name__)

JOB_ID = 'ats_board_discovery'


class DiscoveryScheduler:
    """Owns the run counters and feeds them through each cycle."""

    def __init__(self, cycle: DiscoveryCycle, interval_seconds: int = 60):
        self.cycle = cycle
        self.interval_seconds = interval_seconds
        self.counters = RunCounters()
        self.last_report = None

    def tick(self) -> CycleReport:
        report = self.cycle.run(self.counters)
        self.counters = report.counters
        self.last_report = report
        if not report.skipped:
            logger.info("-" * 47)
        return report

    def build_scheduler(self) -> BlockingScheduler:
        scheduler = BlockingScheduler()
        scheduler.add_job(
            self.tick,
            'interval',
            seconds=self.interval_seconds,
            id=JOB_ID,
            max_instances=1,
            coalesce=True,
            next_run_time=datetime.now()
        )
        return scheduler

    def start(self):
        """Block, running a cycle every interval_seconds until interrupted."""
        scheduler = self.build_scheduler()
        logger.info(f"Scheduler started: one discovery cycle every {self.interval_seconds}s")
        try:
            scheduler.start()
        except (KeyboardInterrupt, SystemExit):
            logger.info(
                f"Scheduler stopped after {self.counters.cycle_count} cycles, "
                f"{self.counters.total_candidates_fetched} candidates fetched"
            )
