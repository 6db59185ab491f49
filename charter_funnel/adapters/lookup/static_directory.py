"""Bundled directory of US commercial airports.

Loads data/us_airports.csv once and filters it locally. Useful as an
offline provider, or chained after the HTTP directory so suggestions
still appear when the external service is down.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from ...config import LookupConfig, get_config
from ...domain.us_states import US_STATES, US_TERRITORIES

_REGION_NAMES = {**US_STATES, **US_TERRITORIES}


@dataclass
class StaticAirportDirectory:
    """Airport directory backed by a CSV file.

    Attributes:
        config: Lookup configuration (path to the CSV file)
    """

    config: LookupConfig = field(default_factory=lambda: get_config().lookup)
    name: str = "static_us"

    _rows: Optional[List[Dict[str, str]]] = field(default=None, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def path(self) -> Path:
        return self.config.static_directory_path

    def lookup(self, query: str) -> Optional[List[Dict[str, str]]]:
        """Rows whose city, code, name or state contains the query.

        Returns:
            Matching rows in file order, or None if the file is unreadable.
        """
        rows = self._load()
        if rows is None:
            return None

        needle = query.strip().lower()
        return [
            row
            for row in rows
            if needle in row["city"].lower()
            or needle in row["code"].lower()
            or needle in row["nameAirport"].lower()
            or needle in row["state"].lower()
            or needle in row["nameState"].lower()
        ]

    def _load(self) -> Optional[List[Dict[str, str]]]:
        if self._rows is not None:
            return self._rows

        rows: List[Dict[str, str]] = []
        try:
            with self.path.open(encoding="utf-8", newline="") as f:
                for raw in csv.DictReader(f):
                    code = (raw.get("code") or "").strip().upper()
                    airport_name = (raw.get("name") or "").strip()
                    if not code and not airport_name:
                        continue
                    state = (raw.get("state") or "").strip().upper()
                    rows.append(
                        {
                            "city": (raw.get("city") or "").strip(),
                            "code": code,
                            "nameAirport": airport_name,
                            "state": state,
                            "nameState": _REGION_NAMES.get(state, ""),
                            "country": "United States",
                        }
                    )
        except OSError as e:
            self._logger.error(
                "Could not read airport directory",
                extra={"path": str(self.path), "error": str(e)},
            )
            return None

        self._logger.info(
            "Airport directory loaded", extra={"path": str(self.path), "rows": len(rows)}
        )
        self._rows = rows
        return rows
