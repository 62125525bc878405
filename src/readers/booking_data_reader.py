"""Reader for exported booking data.

The booking store itself is external; this reader loads a JSON export of it
so reports can be run from the command line. Expected document structure:

```
{
  "clients":  [{"id": "c-1", "name": "Acme"}],
  "projects": [{"id": "p-1", "name": "Brand refresh", "billingType": "package"}],
  "bookings": [{"id": "b-1", "startTime": "2024-05-06T14:00:00",
                "endTime": "2024-05-06T16:00:00", "clientId": "c-1",
                "projectId": "p-1", "duration": 2}]
}
```
"""

import datetime as dt
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from src.calculators.time_utils import to_calendar_time
from src.models.booking import BookingRecord
from src.models.client import Client
from src.models.project import Project

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class BookingDataError(Exception):
    """Raised when a booking data document cannot be read at all."""


@dataclass
class BookingData:
    """Clients, projects and booking records loaded from one document."""

    clients: List[Client] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)
    bookings: List[BookingRecord] = field(default_factory=list)
    skipped_rows: int = 0


class BookingDataReader:
    """Loads and validates booking data exports.

    Rows failing model validation are logged and skipped, so one malformed
    record does not prevent a report from being produced.

    Timestamps carrying an offset (e.g. ``"2024-05-06T14:00:00Z"``) are
    converted to naive wall-clock time in ``timezone``; naive timestamps are
    kept as they are.

    Example:
        >>> reader = BookingDataReader(timezone=dt.timezone.utc)
        >>> data = reader.parse_document({
        ...     "clients": [{"id": "c-1", "name": "Acme"}],
        ...     "bookings": [{"id": "b-1", "clientId": "c-1",
        ...                   "startTime": "2024-05-06T14:00:00Z",
        ...                   "endTime": "2024-05-06T16:00:00Z"}],
        ... })
        >>> data.bookings[0].start_time
        datetime.datetime(2024, 5, 6, 14, 0)
    """

    def __init__(self, timezone: dt.tzinfo = dt.timezone.utc):
        self.timezone = timezone

    def read_file(self, path: Union[str, Path]) -> BookingData:
        """Read booking data from a JSON file.

        Raises:
            BookingDataError: If the file is missing or not valid JSON
        """
        path = Path(path)
        logger.info(f"Loading booking data from {path}")

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise BookingDataError(f"Cannot read booking data from {path}: {e}") from e

        try:
            document = json.loads(raw)
        except json.JSONDecodeError as e:
            raise BookingDataError(f"Invalid JSON in {path}: {e}") from e

        return self.parse_document(document)

    def parse_document(self, document: Any) -> BookingData:
        """Validate a decoded booking data document.

        Raises:
            BookingDataError: If the document is not a JSON object
        """
        if not isinstance(document, dict):
            raise BookingDataError(
                f"Booking data must be a JSON object, got {type(document).__name__}"
            )

        data = BookingData()
        data.clients = self._parse_rows(document, "clients", Client, data)
        data.projects = self._parse_rows(document, "projects", Project, data)
        data.bookings = [
            self._to_calendar_time(record)
            for record in self._parse_rows(document, "bookings", BookingRecord, data)
        ]

        logger.info(
            f"Loaded {len(data.clients)} clients, {len(data.projects)} projects, "
            f"{len(data.bookings)} bookings ({data.skipped_rows} rows skipped)"
        )
        return data

    def _to_calendar_time(self, record: BookingRecord) -> BookingRecord:
        return record.model_copy(
            update={
                "start_time": to_calendar_time(record.start_time, self.timezone),
                "end_time": to_calendar_time(record.end_time, self.timezone),
            }
        )

    def _parse_rows(
        self,
        document: Dict[str, Any],
        key: str,
        model: Type[ModelT],
        data: BookingData,
    ) -> List[ModelT]:
        rows = document.get(key) or []
        if not isinstance(rows, list):
            raise BookingDataError(f"'{key}' must be a list, got {type(rows).__name__}")

        parsed: List[ModelT] = []
        for index, row in enumerate(rows):
            if not isinstance(row, dict):
                logger.warning(f"Skipping {key}[{index}]: expected an object")
                data.skipped_rows += 1
                continue
            try:
                parsed.append(model.model_validate(row))
            except ValidationError as e:
                logger.warning(f"Validation error for {key}[{index}]: {e}")
                data.skipped_rows += 1

        return parsed
