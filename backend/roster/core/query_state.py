"""Query State — permissive parsing of listing query parameters into typed values.

Invariants:
    - parse() NEVER raises: malformed or unknown values degrade to "absent"
    - Sort is a single `order` parameter: `<column>` is ascending, `<column>-desc` descending
    - Unknown sort columns pass through unchanged (validated by the listing allow-list)
    - A column whose own name ends in `-desc` cannot be sorted ascending: its
      `order` value reads back as descending on the shorter name
    - skill_ids is a set of ints in 1..MAX_SKILL_ID; non-numeric or out-of-range
      entries are dropped
    - Dates are dd/mm/yyyy; `from` starts at 00:00:00, `to` ends at 23:59:59.999999
    - No inverted-range check: from_date > to_date is a valid (empty) query

Design Decisions:
    - Frozen dataclasses for SortState/FilterState: value objects rebuilt per request,
      safe to share between Sortable and the filter builder
    - Suffix form (`name-desc`) over a separate `direction` parameter: one key to
      preserve, one key to replace when building sort links
    - Skills accepted as `skills`, `skills[]` or `skills[N]`: HTML forms and
      PHP-style clients both produce these
"""

import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, datetime, time, timezone

from roster.core.domain_types import SkillId, SortDirection, UserState


ORDER_PARAM = "order"
PAGE_PARAM = "page"
DESC_SUFFIX = "-desc"
DATE_FORMAT = "%d/%m/%Y"

# skill_id is a 32-bit INTEGER column
MAX_SKILL_ID = 2**31 - 1

_SKILL_KEY = re.compile(r"^skills(\[\d*\])?$")

RawParams = Mapping[str, str | Sequence[str]]


@dataclass(frozen=True)
class SortState:
    """Current sort column and direction. column=None means default order."""
    column: str | None = None
    direction: SortDirection = SortDirection.ASC

    def to_param(self) -> str | None:
        """Encode as the `order` parameter value."""
        if self.column is None:
            return None
        if self.direction is SortDirection.DESC:
            return f"{self.column}{DESC_SUFFIX}"
        return self.column

    def next_for(self, column: str) -> "SortState":
        """Sort toggle: same column flips direction, another column starts ascending."""
        if column == self.column:
            return SortState(column, self.direction.toggled())
        return SortState(column, SortDirection.ASC)


@dataclass(frozen=True)
class FilterState:
    """Optional, independent listing filters. All-None means no filtering."""
    state: UserState | None = None
    role: str | None = None
    skill_ids: frozenset[SkillId] = frozenset()
    from_date: date | None = None
    to_date: date | None = None

    @property
    def is_empty(self) -> bool:
        return (
            self.state is None and self.role is None and not self.skill_ids
            and self.from_date is None and self.to_date is None
        )

    def to_dict(self) -> dict:
        """JSON-friendly echo of the active filters."""
        return {
            "state": self.state.value if self.state else None,
            "role": self.role,
            "skills": sorted(self.skill_ids),
            "from_date": self.from_date.strftime(DATE_FORMAT) if self.from_date else None,
            "to_date": self.to_date.strftime(DATE_FORMAT) if self.to_date else None,
        }


# ─── Public API ──────────────────────────────────────────────────

def parse(raw_params: RawParams) -> tuple[SortState, FilterState]:
    """Parse raw query parameters into (SortState, FilterState). Never raises."""
    sort = parse_sort(scalar_param(raw_params, ORDER_PARAM))
    filters = FilterState(
        state=_parse_state(scalar_param(raw_params, "state")),
        role=_parse_role(scalar_param(raw_params, "role")),
        skill_ids=parse_skill_ids(raw_params),
        from_date=parse_date(scalar_param(raw_params, "from")),
        to_date=parse_date(scalar_param(raw_params, "to")),
    )
    return sort, filters


def parse_sort(value: str | None) -> SortState:
    """Split `<column>[-desc]` into a SortState."""
    if not value:
        return SortState()
    if value.endswith(DESC_SUFFIX):
        column, direction = value[:-len(DESC_SUFFIX)], SortDirection.DESC
    else:
        column, direction = value, SortDirection.ASC
    if not column:
        return SortState()
    return SortState(column, direction)


def parse_page(raw_params: RawParams) -> int:
    """1-based page number; anything malformed or below 1 is page 1."""
    value = scalar_param(raw_params, PAGE_PARAM)
    if value is None:
        return 1
    try:
        page = int(value.strip())
    except ValueError:
        return 1
    return max(page, 1)


def parse_skill_ids(raw_params: RawParams) -> frozenset[SkillId]:
    """Collect integer skill ids from skills / skills[] / skills[N] keys."""
    ids: set[SkillId] = set()
    for key, value in raw_params.items():
        if not _SKILL_KEY.match(key):
            continue
        for item in _as_list(value):
            try:
                skill_id = int(item.strip())
            except (ValueError, AttributeError):
                continue
            if 0 < skill_id <= MAX_SKILL_ID:
                ids.add(SkillId(skill_id))
    return frozenset(ids)


def parse_date(value: str | None) -> date | None:
    """Parse a dd/mm/yyyy date; invalid input is None."""
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        return None


def start_of_day(day: date) -> datetime:
    """Inclusive lower bound for a `from` date."""
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def end_of_day(day: date) -> datetime:
    """Inclusive upper bound for a `to` date."""
    return datetime.combine(day, time.max, tzinfo=timezone.utc)


def collect_params(pairs: Iterable[tuple[str, str]]) -> dict[str, str | list[str]]:
    """Fold (key, value) pairs into a mapping. Repeated keys become lists.

    Key order follows first appearance, so links built from the result keep
    the caller's parameter order.
    """
    params: dict[str, str | list[str]] = {}
    for key, value in pairs:
        if key not in params:
            params[key] = value
        elif isinstance(params[key], list):
            params[key].append(value)
        else:
            params[key] = [params[key], value]
    return params


def scalar_param(raw_params: RawParams, key: str) -> str | None:
    """Single string value for key; for repeated keys the last value wins."""
    values = [v for v in _as_list(raw_params.get(key)) if isinstance(v, str)]
    return values[-1] if values else None


# ─── Helpers ─────────────────────────────────────────────────────

def _as_list(value: object) -> list:
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return list(value)
    return []


def _parse_state(value: str | None) -> UserState | None:
    if value is None:
        return None
    try:
        return UserState(value.strip().lower())
    except ValueError:
        return None


def _parse_role(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None
