"""
Taxonomy loader for syntax-data.json.

The Hew compiler publishes its keyword and type taxonomy as JSON:

    {
      "version": "0.9.0",
      "keywords": {"control_flow": [...], "declarations": [...], ...},
      "types": {"integer": [...], "float": [...], ...},
      "contextual_identifiers": {"self": {...}, "description": "..."},
      "all_keywords": [...]
    }

The document is validated once here so the rest of the pipeline can rely on
a concrete shape. Disjointness of keyword categories is the producer's
invariant and is not re-checked.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Tuple

from hewgrammar.sync.errors import MalformedInputError
from hewgrammar.sync.files import read_json

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("version", "keywords", "types", "contextual_identifiers", "all_keywords")


@dataclass(frozen=True)
class Taxonomy:
    """Canonical keyword/type listing published by the compiler."""

    version: str
    keywords: Dict[str, Tuple[str, ...]]
    types: Dict[str, Tuple[str, ...]]
    contextual_identifiers: Dict[str, Any]
    all_keywords: Tuple[str, ...]
    source: Path = field(default=Path("syntax-data.json"), compare=False)

    def keyword_category(self, name: str) -> Tuple[str, ...]:
        """Keywords of a category, empty if the taxonomy has none."""
        return self.keywords.get(name, ())

    def type_category(self, name: str) -> Tuple[str, ...]:
        """Type names of a category, empty if the taxonomy has none."""
        return self.types.get(name, ())

    @classmethod
    def from_dict(cls, data: Any, source: Path = Path("syntax-data.json")) -> "Taxonomy":
        """
        Build a Taxonomy from parsed JSON.

        Raises:
            MalformedInputError: a required field is missing or has the wrong shape
        """
        if not isinstance(data, dict):
            raise MalformedInputError(
                f"{source}: expected a JSON object at top level", path=source
            )

        missing = [name for name in REQUIRED_FIELDS if name not in data]
        if missing:
            raise MalformedInputError(
                f"{source}: missing required field(s): {', '.join(missing)}",
                path=source,
            )

        version = data["version"]
        if not isinstance(version, (str, int, float)) or isinstance(version, bool):
            raise MalformedInputError(f"{source}: 'version' must be a string", path=source)

        contextual = data["contextual_identifiers"]
        if not isinstance(contextual, dict):
            raise MalformedInputError(
                f"{source}: 'contextual_identifiers' must be an object", path=source
            )

        return cls(
            version=str(version),
            keywords=_string_categories(data["keywords"], "keywords", source),
            types=_string_categories(data["types"], "types", source),
            contextual_identifiers=dict(contextual),
            all_keywords=_string_list(data["all_keywords"], "all_keywords", source),
            source=source,
        )


def _string_list(value: Any, where: str, source: Path) -> Tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise MalformedInputError(
            f"{source}: '{where}' must be a list of strings", path=source
        )
    return tuple(value)


def _string_categories(value: Any, where: str, source: Path) -> Dict[str, Tuple[str, ...]]:
    if not isinstance(value, dict):
        raise MalformedInputError(f"{source}: '{where}' must be an object", path=source)
    return {
        name: _string_list(members, f"{where}.{name}", source)
        for name, members in value.items()
    }


def load_taxonomy(path: Path) -> Taxonomy:
    """
    Load and validate syntax-data.json.

    Args:
        path: Location of the taxonomy file

    Returns:
        Parsed Taxonomy

    Raises:
        MissingInputError: path does not exist
        MalformedInputError: content is not JSON or lacks a required field
    """
    path = Path(path)
    data = read_json(path, "syntax-data.json")
    taxonomy = Taxonomy.from_dict(data, source=path)
    logger.debug(
        "Loaded taxonomy v%s: %d keyword categories, %d type categories, %d keywords",
        taxonomy.version,
        len(taxonomy.keywords),
        len(taxonomy.types),
        len(taxonomy.all_keywords),
    )
    return taxonomy
