"""
JSON file adapters for the synchronization engine.

All reads fail fast: a missing file raises MissingInputError and content
that does not parse raises MalformedInputError. Writes always rewrite the
whole file with 2-space indentation and a trailing newline so diffs stay
limited to intentionally changed fields.
"""
import json
import logging
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple

from hewgrammar.sync.errors import MalformedInputError, MissingInputError

logger = logging.getLogger(__name__)


def read_json(
    path: Path,
    label: str,
    object_pairs_hook: Optional[Callable[[List[Tuple[str, Any]]], Any]] = None,
) -> Any:
    """
    Read and parse a JSON document.

    Args:
        path: File to read
        label: Human-readable document name used in error messages
        object_pairs_hook: Optional hook forwarded to json.loads

    Returns:
        Parsed JSON value

    Raises:
        MissingInputError: path does not exist
        MalformedInputError: content is not UTF-8 or not valid JSON
    """
    path = Path(path)
    if not path.exists():
        raise MissingInputError(f"{label} not found at {path}", path=path)

    logger.debug("Reading %s from %s", label, path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise MalformedInputError(f"{label} at {path} is not valid UTF-8: {e}", path=path) from e
    try:
        return json.loads(text, object_pairs_hook=object_pairs_hook)
    except json.JSONDecodeError as e:
        raise MalformedInputError(
            f"{label} at {path} is not valid JSON: {e}", path=path
        ) from e


def render_json(data: Any) -> str:
    """Render data the way the grammar file is stored on disk."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def write_json(path: Path, data: Any) -> None:
    """Overwrite path with the stable JSON rendering of data."""
    Path(path).write_text(render_json(data), encoding="utf-8")
    logger.info("Wrote %s", path)
