"""Sortable — CSS state classes and toggle links for sortable listing columns.

Invariants:
    - classes() always contains SORTABLE_CLASS; at most one direction marker,
      and only for the current sort column
    - url() emits preserved parameters in their original order, then `order` LAST
    - Toggle: current column flips asc <-> desc; any other column starts asc
    - `page` is never preserved: a new sort always lands on page 1
    - Pure: no request globals, state is whatever was passed to appends()

Design Decisions:
    - Page reset enforced here (dropping `page`), not in the listing service:
      a link is the only way a client changes the sort
    - Unknown columns are not rejected: validation belongs to the query layer
      (listing_service.SORTABLE_COLUMNS)
"""

from urllib.parse import urlencode

from roster.core.domain_types import SortDirection
from roster.core.query_state import (
    ORDER_PARAM, PAGE_PARAM, RawParams, SortState, parse_sort, scalar_param,
)


SORTABLE_CLASS = "link-sortable"
SORTED_UP_CLASS = "link-sorted-up"
SORTED_DOWN_CLASS = "link-sorted-down"


class Sortable:
    """Builds sort links for one listing page."""

    def __init__(self, base_url: str, sort: SortState | None = None):
        self.base_url = base_url
        self.sort = sort or SortState()
        self._query: dict[str, str | list[str]] = {}

    @classmethod
    def from_params(cls, base_url: str, params: RawParams) -> "Sortable":
        """Sortable for a request: current sort and extras taken from its query."""
        return cls(base_url).appends(params)

    @property
    def query(self) -> dict[str, str | list[str]]:
        """Preserved (non-sort, non-page) parameters, in insertion order."""
        return dict(self._query)

    def appends(self, params: RawParams) -> "Sortable":
        """Merge query parameters. `order` updates the sort state, `page` is dropped."""
        for key, value in params.items():
            if key == ORDER_PARAM:
                self.sort = parse_sort(scalar_param(params, ORDER_PARAM))
            elif key == PAGE_PARAM:
                continue
            else:
                self._query[key] = value
        return self

    def classes(self, column: str) -> str:
        classes = [SORTABLE_CLASS]
        if column == self.sort.column:
            if self.sort.direction is SortDirection.ASC:
                classes.append(SORTED_UP_CLASS)
            else:
                classes.append(SORTED_DOWN_CLASS)
        return " ".join(classes)

    def url(self, column: str) -> str:
        """Link that applies the next sort state for column."""
        query = list(self._query.items())
        query.append((ORDER_PARAM, self.sort.next_for(column).to_param()))
        return f"{self.base_url}?{urlencode(query, doseq=True)}"

    def links(self, columns) -> dict[str, dict[str, str]]:
        """{column: {"classes", "url"}} for every column, for the rendering layer."""
        return {
            column: {"classes": self.classes(column), "url": self.url(column)}
            for column in columns
        }
