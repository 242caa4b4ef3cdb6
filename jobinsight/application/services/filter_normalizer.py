"""Filter normalization service."""

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Callable, List, Optional, Tuple
from uuid import UUID

from jobinsight.config.logging import get_logger
from jobinsight.domain.exceptions.validation_error import InvalidIdentifierError
from jobinsight.domain.value_objects.date_window import (
    DateWindow,
    to_naive_utc,
    trailing_window,
    utcnow,
)
from jobinsight.domain.value_objects.job_filter import (
    JobFilter,
    PageRequest,
    TeamLeaderMatch,
)

logger = get_logger(__name__)

ALL = "All"


@dataclass
class RawFilterParams:
    """Query parameters exactly as received."""

    start_date: Optional[str] = None
    end_date: Optional[str] = None
    status: Optional[str] = None
    type: Optional[str] = None
    priority: Optional[str] = None
    province: Optional[str] = None
    team_leader: Optional[str] = None
    technician_id: Optional[str] = None
    technician_ids: Optional[str] = None
    search: Optional[str] = None
    page: Optional[str] = None
    limit: Optional[str] = None


def parse_identifier(field_name: str, value: str) -> UUID:
    """Parse a path identifier, raising InvalidIdentifierError when malformed."""
    try:
        return UUID(str(value).strip())
    except (ValueError, AttributeError, TypeError):
        raise InvalidIdentifierError(field_name, value)


class FilterNormalizer:
    """Turns raw query parameters into a canonical JobFilter.

    Normalization never fails: anything unparsable falls back to its default.
    """

    def __init__(
        self,
        tz: tzinfo,
        default_window_days: int = 30,
        default_limit: int = 10,
        max_limit: int = 10000,
        export_threshold: int = 100,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.tz = tz
        self.default_window_days = default_window_days
        self.default_limit = default_limit
        self.max_limit = max_limit
        self.export_threshold = export_threshold
        self.clock = clock

    def normalize(
        self,
        params: RawFilterParams,
        default_limit: Optional[int] = None,
        with_window: bool = True,
    ) -> JobFilter:
        """Build the canonical filter for one request."""
        window = None
        window_defaulted = False
        if with_window:
            window, window_defaulted = self.normalize_window(
                params.start_date, params.end_date
            )

        return JobFilter(
            window=window,
            status=self._categorical(params.status),
            type=self._categorical(params.type),
            priority=self._categorical(params.priority),
            province=self._categorical(params.province),
            team_leader=self._team_leader(params.team_leader),
            technician_ids=self._technician_ids(
                params.technician_ids, params.technician_id
            ),
            search=self._search(params.search),
            page=self.normalize_page(
                params.page, params.limit, default_limit or self.default_limit
            ),
            window_defaulted=window_defaulted,
        )

    def normalize_window(
        self, start_date: Optional[str], end_date: Optional[str]
    ) -> Tuple[DateWindow, bool]:
        """Resolve the date window; returns it and whether both ends defaulted."""
        now = self.clock()
        default = trailing_window(now, self.default_window_days)

        start = self._parse_instant("startDate", start_date)
        end = self._parse_instant("endDate", end_date)

        window = DateWindow(
            start=start if start is not None else default.start,
            end=end if end is not None else default.end,
        )
        return window, start is None and end is None

    def normalize_page(
        self, page: Optional[str], limit: Optional[str], default_limit: int
    ) -> PageRequest:
        page_number = self._positive_int(page, 1)
        page_limit = self._positive_int(limit, default_limit)

        if page_limit > self.max_limit:
            logger.warning(
                "Requested limit capped",
                requested=page_limit,
                max_limit=self.max_limit,
            )
            page_limit = self.max_limit

        if page_limit >= self.export_threshold:
            logger.info("Export request detected", limit=page_limit, page=page_number)

        return PageRequest(page=page_number, limit=page_limit)

    def _parse_instant(self, name: str, value: Optional[str]) -> Optional[datetime]:
        if value is None or not value.strip():
            return None
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            logger.warning("Unparsable date ignored", parameter=name, value=value)
            return None
        return to_naive_utc(parsed, self.tz)

    def _categorical(self, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if not value or value == ALL:
            return None
        return value

    def _search(self, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None

    def _team_leader(self, value: Optional[str]) -> Optional[TeamLeaderMatch]:
        value = self._categorical(value)
        if value is None:
            return None
        tokens = value.split()
        return TeamLeaderMatch(first_name=tokens[0], last_name=" ".join(tokens[1:]))

    def _technician_ids(
        self, technician_ids: Optional[str], technician_id: Optional[str]
    ) -> Tuple[UUID, ...]:
        # Multi-select takes precedence over the single id
        raw = self._categorical(technician_ids)
        candidates: List[str] = []
        if raw is not None:
            candidates = [part.strip() for part in raw.split(",") if part.strip()]
        else:
            single = self._categorical(technician_id)
            if single is not None:
                candidates = [single]

        parsed = []
        for candidate in candidates:
            try:
                parsed.append(UUID(candidate))
            except ValueError:
                logger.warning("Invalid technician id dropped", value=candidate)

        return tuple(dict.fromkeys(parsed))

    def _positive_int(self, value: Optional[str], default: int) -> int:
        if value is None:
            return default
        try:
            number = int(str(value).strip())
        except ValueError:
            return default
        return number if number > 0 else default
