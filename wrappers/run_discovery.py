#!/usr/bin/env python3
"""
Wrapper script: ATS Board Discovery

Runs the discovery scheduler (or a single cycle with --once).

Usage:
------
python wrappers/run_discovery.py
python wrappers/run_discovery.py --once --verbose
python wrappers/run_discovery.py --config config/discovery.yaml

Note: This is a wrapper around pipeline/run_discovery.py
"""

import sys
from pathlib import Path

# Add project root to Python path for module imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

if __name__ == "__main__":
    from pipeline.run_discovery import main
    sys.exit(main())
