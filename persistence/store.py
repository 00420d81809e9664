from __future__ import annotations

import csv
import os
import tempfile
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from daycount_logging import get_logger
from tracker.codec import HEADER, decode_row, encode_row
from tracker.errors import ReadError, RowError, WriteError
from tracker.models import Event
from tracker.timeutil import today

SEED_CATEGORY = "meta"
SEED_DESCRIPTION = "Started counting days"


@dataclass
class LoadResult:
    events: List[Event] = field(default_factory=list)
    errors: List[RowError] = field(default_factory=list)
    seeded: bool = False


class EventStore:
    """CSV-backed event file.

    A missing file is created with a single seed event dated on the day of the
    first load. There is no locking; two processes writing the same file race.
    """

    def __init__(self, path: Path, clock: Optional[Callable[[], date]] = None):
        self.path = path
        self.clock = clock or today
        self.logger = get_logger(__name__, path=str(path))

    def load(self) -> LoadResult:
        if not self.path.exists():
            return self._seed()

        result = LoadResult()
        try:
            with self.path.open("r", encoding="utf-8-sig", newline="") as handle:
                reader = csv.reader(handle)
                header = next(reader, None)
                if header is None:
                    raise ReadError(f"{self.path}: file is empty, expected a header row")
                if tuple(column.strip() for column in header) != HEADER:
                    raise ReadError(
                        f"{self.path}: unexpected header {','.join(header)!r}, "
                        f"expected {','.join(HEADER)!r}"
                    )
                for fields in reader:
                    if not fields or all(not value.strip() for value in fields):
                        continue
                    try:
                        result.events.append(decode_row(fields))
                    except RowError as exc:
                        exc.line = reader.line_num
                        result.errors.append(exc)
                        self.logger.warning(
                            "store.row_skipped",
                            line=exc.line,
                            kind=exc.kind,
                            text=exc.text,
                            description=exc.description,
                        )
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            raise ReadError(f"{self.path}: {exc}") from exc

        self.logger.info("store.loaded", events=len(result.events), skipped=len(result.errors))
        return result

    def save(self, events: Iterable[Event]) -> None:
        tmp_name: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                writer = csv.writer(handle, lineterminator="\n")
                writer.writerow(HEADER)
                count = 0
                for event in events:
                    writer.writerow(encode_row(event))
                    count += 1
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except OSError as exc:
            raise WriteError(f"{self.path}: {exc}") from exc
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    self.logger.debug("store.tmp_cleanup_failed", tmp=tmp_name)
        self.logger.info("store.saved", events=count)

    def _seed(self) -> LoadResult:
        seed = Event(date=self.clock(), category=SEED_CATEGORY, description=SEED_DESCRIPTION)
        self.save([seed])
        self.logger.info("store.seeded", date=seed.date.isoformat())
        return LoadResult(events=[seed], seeded=True)
