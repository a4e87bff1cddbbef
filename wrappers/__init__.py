"""
Wrapper Scripts: User-Facing Entry Points

Thin scripts users call from the project root:
    python wrappers/run_discovery.py
    python wrappers/run_discovery.py --once

The actual implementation lives in pipeline/.
"""
