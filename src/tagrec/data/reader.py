from __future__ import annotations
import logging
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

import snowballstemmer

from tagrec.data.errors import InvalidTimestamp, IOFailure, MalformedRecord, UnparsableRating
from tagrec.data.interning import InternTable
from tagrec.data.schema import Event, ParsedRecord
from tagrec.data.store import EventStore

logger = logging.getLogger(__name__)

DELIMITER = '";"'
MIN_FIELDS = 4
PROGRESS_EVERY = 100_000

Stemmer = Callable[[str], str]


def make_stemmer(enabled: bool, language: str = "english") -> Optional[Stemmer]:
    if not enabled:
        return None
    return snowballstemmer.stemmer(language).stemWord


def _split_tokens(field: str) -> List[str]:
    return [t.lower() for t in field.split(",") if t]


def parse_rating(field: str) -> float:
    try:
        return float(field)
    except ValueError as exc:
        raise UnparsableRating(f"rating {field!r} is not a decimal") from exc


def check_timestamp(ts: str) -> None:
    if ts and not ts.isdecimal():
        raise InvalidTimestamp(f"timestamp {ts!r} is not numeric")


def parse_line(raw: str, stemmer: Optional[Stemmer] = None) -> ParsedRecord:
    """
    Split one raw line into its fields.

    Fields: user, resource, timestamp, tags, [categories], [rating].
    Quote characters are removed from every field. Raises MalformedRecord
    when fewer than 4 fields are present.
    """
    parts = raw.rstrip("\r\n").split(DELIMITER)
    while parts and parts[-1] == "":
        parts.pop()
    if len(parts) < MIN_FIELDS:
        raise MalformedRecord(f"expected at least {MIN_FIELDS} fields, got {len(parts)}")
    fields = [p.replace('"', "") for p in parts]

    tags = _split_tokens(fields[3])
    if stemmer is not None:
        tags = [stemmer(t) for t in tags]
    categories = _split_tokens(fields[4]) if len(fields) > 4 else []

    rating = None
    if len(fields) > 5:
        try:
            rating = parse_rating(fields[5])
        except UnparsableRating as exc:
            logger.debug("Rating omitted: %s", exc)

    return ParsedRecord(
        user=fields[0],
        resource=fields[1],
        timestamp=fields[2],
        tags=tags,
        categories=categories,
        rating=rating,
    )


class TaggingLogReader:
    """
    Streams a tagging log into interning tables and an EventStore.

    Lines are parsed one at a time; a well-formed line first commits the
    record currently in flight and then becomes the new in-flight record.
    The last in-flight record is committed at end of input.
    """

    def __init__(
        self,
        count_limit: int = 0,
        stemming: bool = False,
        stemmer: Optional[Stemmer] = None,
    ) -> None:
        if count_limit < 0:
            raise ValueError("count_limit must be >= 0")
        self.count_limit = count_limit
        self.stemmer = stemmer if stemmer is not None else make_stemmer(stemming)

        self.users: InternTable[str] = InternTable()
        self.resources: InternTable[str] = InternTable()
        self.tags: InternTable[str] = InternTable()
        self.categories: InternTable[str] = InternTable()
        self.store = EventStore()

    # ---- reading ----

    def load(self, path: Union[str, Path]) -> None:
        """Read a whole file; raises IOFailure if it cannot be opened or read."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                self.read_lines(f)
        except (OSError, UnicodeDecodeError) as exc:
            raise IOFailure(f"cannot read tagging log {path}: {exc}") from exc

    def read_file(self, path: Union[str, Path]) -> bool:
        try:
            self.load(path)
        except IOFailure:
            logger.exception("Reading %s failed", path)
            return False
        return True

    def read_lines(self, lines: Iterable[str]) -> None:
        pending: Optional[ParsedRecord] = None
        for line_no, raw in enumerate(lines, start=1):
            try:
                record = parse_line(raw, self.stemmer)
            except MalformedRecord as exc:
                logger.warning("Line %d skipped: %s", line_no, exc)
                continue
            if pending is not None:
                self.commit(pending)
            pending = record
        if pending is not None:
            self.commit(pending)

    def commit(self, record: ParsedRecord) -> bool:
        """Intern and store one record. Returns False if it was skipped."""
        if not record.user or not record.tags:
            return False
        try:
            check_timestamp(record.timestamp)
        except InvalidTimestamp as exc:
            logger.warning("Event of user %r skipped: %s", record.user, exc)
            return False

        do_count = self.count_limit == 0 or len(self.store) < self.count_limit
        user_id = self.users.intern_and_count(record.user, do_count)
        resource_id = self.resources.intern_and_count(record.resource, do_count)
        category_ids = tuple(self.categories.intern_and_count(c, do_count) for c in record.categories)
        tag_ids = tuple(self.tags.intern_and_count(t, do_count) for t in record.tags)

        self.store.append(Event(
            user_id=user_id,
            resource_id=resource_id,
            timestamp=record.timestamp,
            rating=record.rating,
            tag_ids=tag_ids,
            category_ids=category_ids,
        ))
        if len(self.store) % PROGRESS_EVERY == 0:
            logger.info("Committed %d events", len(self.store))
        return True

    # ---- stats ----

    def tag_assignments_count(self) -> int:
        return self.store.total_tag_assignments(self.count_limit)
