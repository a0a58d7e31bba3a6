"""
Named Query Provider
====================

Loads named queries from a YAML file, the external mapping configuration
of the roster module.

File layout:
    named_queries:
      find_by_guide:
        entity: Guide          # optional, rows load into this entity
        description: ...       # optional
        sql: select * from guide where name = :name
"""

from pathlib import Path
from typing import Dict, List, Optional

import yaml

from guide_roster.core import ConfigurationException, ResourceNotFoundException
from guide_roster.roster.application import INamedQueryProvider
from guide_roster.roster.domain import NamedQuery
from guide_roster.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

KNOWN_ENTITIES = {"Guide", "Student"}


class YAMLNamedQueryProvider(INamedQueryProvider):
    """
    Named query provider that loads from YAML.

    Call reload() to pick up changes to the file.
    """

    def __init__(self, config_path: Path | str):
        self._config_path = Path(config_path)
        self._queries: Dict[str, NamedQuery] = {}
        self._load_config()

    def _load_config(self) -> None:
        """Load named queries from the YAML file."""
        if not self._config_path.exists():
            raise ConfigurationException(
                f"Named queries file not found: {self._config_path}"
            )

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationException(
                f"Invalid YAML in {self._config_path}: {e}"
            ) from e

        entries = data.get("named_queries") if isinstance(data, dict) else None
        if not isinstance(entries, dict):
            raise ConfigurationException(
                f"{self._config_path} has no 'named_queries' mapping"
            )

        queries = {}
        for name, entry in entries.items():
            queries[name] = self._parse_entry(name, entry)

        self._queries = queries
        logger.debug("Loaded named queries", extra={
            "path": str(self._config_path),
            "count": len(queries),
        })

    def _parse_entry(self, name: str, entry: object) -> NamedQuery:
        if not isinstance(entry, dict) or not isinstance(entry.get("sql"), str) \
                or not entry["sql"].strip():
            raise ConfigurationException(
                f"Named query '{name}' must define a non-empty 'sql' string"
            )

        entity: Optional[str] = entry.get("entity")
        if entity is not None and entity not in KNOWN_ENTITIES:
            raise ConfigurationException(
                f"Named query '{name}' maps to unknown entity '{entity}'",
                {"known_entities": sorted(KNOWN_ENTITIES)},
            )

        return NamedQuery(
            name=name,
            sql=entry["sql"].strip(),
            entity=entity,
            description=entry.get("description", ""),
        )

    def get(self, name: str) -> NamedQuery:
        """Get a named query by name."""
        try:
            return self._queries[name]
        except KeyError:
            raise ResourceNotFoundException("Named query", name) from None

    def names(self) -> List[str]:
        """List every known query name."""
        return sorted(self._queries)

    def reload(self) -> None:
        """Reload named queries from file."""
        self._load_config()
