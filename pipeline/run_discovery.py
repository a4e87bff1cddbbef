#!/usr/bin/env python3
"""
ATS Board Discovery

Asks Gemini and an Ollama-hosted model for companies that use Greenhouse or
Lever, confirms each name against the platforms' public board APIs, and
writes three lists (Greenhouse only, Lever only, both).

Setup (.env):
    OLLAMA_API_KEY=your_ollama_cloud_key
    GOOGLE_API_KEY=your_gemini_key

Settings: config/discovery.yaml

Usage:
    # Run every interval_seconds until Ctrl+C
    python -m pipeline.run_discovery

    # Single cycle, then exit
    python -m pipeline.run_discovery --once

    # Alternate config, debug logging
    python -m pipeline.run_discovery --config my_discovery.yaml --verbose
"""

import sys
import logging
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pipeline.config import load_settings
from pipeline.cycle_runner import build_discovery_cycle
from pipeline.errors import StartupConfigError
from pipeline.scheduler import DiscoveryScheduler

logger = logging.getLogger('pipeline.run_discovery')


def configure_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    # Keep per-request noise out of INFO output
    for noisy in ('urllib3', 'httpx', 'google_genai', 'apscheduler.executors'):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Discover companies with live Greenhouse / Lever job boards',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '--config', '-c',
        type=str,
        help='Path to discovery YAML config (default: config/discovery.yaml)'
    )
    parser.add_argument(
        '--once',
        action='store_true',
        help='Run a single cycle and exit'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Debug logging (shows every board probe)'
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except StartupConfigError as e:
        logger.error(f"Startup failed: {e}")
        return 1

    scheduler = DiscoveryScheduler(
        build_discovery_cycle(settings),
        interval_seconds=settings.interval_seconds
    )

    if args.once:
        report = scheduler.tick()
        return 0 if report.succeeded else 1

    scheduler.start()
    return 0


if __name__ == '__main__':
    sys.exit(main())
