import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


def get_date_suffix_for_filename() -> str:
    """Returns the current date as a YYYY-MM-DD string for filenames."""
    return datetime.now().strftime("%Y-%m-%d")


def find_latest_report(directory: Path, prefix: str, suffix: str = ".json") -> Optional[tuple[Path, date]]:
    """
    Finds the newest '<prefix>YYYY-MM-DD<suffix>' file in `directory`.
    Returns (path, file_date), or None when nothing matches.
    """
    if not directory.exists():
        logger.info(f"INFO: Input directory {directory} does not exist.")
        return None

    candidates = []
    for path in directory.glob(f"{prefix}*{suffix}"):
        date_part = path.name[len(prefix) : -len(suffix)]
        try:
            file_date = datetime.strptime(date_part, "%Y-%m-%d").date()
        except ValueError:
            logger.warning(f"  > ⚠️  Skipping {path.name}: no YYYY-MM-DD date in the name.")
            continue
        candidates.append((file_date, path))

    if not candidates:
        return None

    file_date, path = max(candidates)
    return path, file_date


def load_json(file_path: Path) -> Optional[Any]:
    """
    Loads a JSON document, trying UTF-8 with BOM support first and then latin-1.
    Returns None (after logging the reason) when the file is missing or unreadable.
    """
    try:
        return json.loads(file_path.read_text(encoding="utf-8-sig"))

    except UnicodeDecodeError:
        logger.info(f"INFO: UTF-8 decoding failed for {file_path.name}. Retrying with 'latin-1'.")
        try:
            return json.loads(file_path.read_text(encoding="latin-1"))
        except json.JSONDecodeError as e_latin1:
            logger.error(f"ERROR: Could not parse {file_path.name} even with latin-1. Reason: {e_latin1}")
            return None

    except FileNotFoundError:
        logger.info(f"INFO: Dataset not found at {file_path}, skipping.")
        return None

    except json.JSONDecodeError as e_json:
        logger.error(f"ERROR: {file_path.name} is not valid JSON. Reason: {e_json}")
        return None
