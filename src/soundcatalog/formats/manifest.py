"""Reader for the provisioned sound manifest."""

import json
from pathlib import Path
from typing import List, Union

from soundcatalog.utils.log import get_logger

logger = get_logger(__name__)


def load_manifest(path: Union[str, Path]) -> List[str]:
    """
    Read the list of provisioned clip file names.

    The manifest is a JSON array of strings. A missing or unreadable
    manifest is not fatal: it yields an empty catalog.

    Args:
        path: Path to the manifest file.

    Returns:
        File names in manifest order.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            entries = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Error loading sounds manifest {path}: {e}")
        return []

    if not isinstance(entries, list):
        logger.error(f"Sounds manifest {path} is not a JSON array")
        return []

    file_names = []
    for entry in entries:
        if isinstance(entry, str) and entry.strip():
            file_names.append(entry)
        else:
            logger.warning(f"Skipping invalid manifest entry: {entry!r}")
    logger.info(f"Manifest {path} lists {len(file_names)} sound(s)")
    return file_names
