"""
Write the classified company lists to flat text files.

Each file is fully overwritten every cycle with one name per line, so the
files always reflect the latest cycle only.
"""

import logging
from pathlib import Path
from typing import Dict, List

from pipeline.errors import PersistenceError
from pipeline.platform_classifier import ClassificationResult

logger = logging.getLogger(__name__)


def write_name_list(path: Path, names: List[str]) -> Path:
    """Overwrite path with names joined by newlines."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text('\n'.join(names), encoding='utf-8')
    except OSError as e:
        raise PersistenceError(f"Failed to write {path}: {e}", path=path) from e
    return path


def write_classification(result: ClassificationResult, output_paths: Dict[str, Path]) -> Dict[str, Path]:
    """
    Write each bucket to its file.

    Args:
        result: Classified names for this cycle
        output_paths: Mapping with 'greenhouse_only', 'lever_only', 'both' keys

    Returns:
        The same bucket -> path mapping, after writing

    Raises:
        PersistenceError: if any file can't be written
    """
    buckets = {
        'greenhouse_only': result.only_greenhouse,
        'lever_only': result.only_lever,
        'both': result.both,
    }

    written = {}
    for bucket, names in buckets.items():
        path = Path(output_paths[bucket])
        written[bucket] = write_name_list(path, names)
        logger.info(f"Wrote {len(names)} names to {path}")

    return written
