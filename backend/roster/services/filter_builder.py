"""Filter Builder — translates a FilterState into one composable SQL predicate.

Invariants:
    - Absent filters contribute no condition; empty FilterState -> true()
    - Present conditions are AND-ed; order of composition is irrelevant
    - Skill filter is an INTERSECTION: a user qualifies iff the number of its
      distinct matching skills equals len(skill_ids). Supersets pass.
    - Date bounds are inclusive: created_at >= start_of_day(from),
      created_at <= end_of_day(to)
    - Inverted date ranges are not rejected (they simply match nothing)

Design Decisions:
    - Skill intersection as `id IN (... GROUP BY user_id HAVING COUNT(DISTINCT
      skill_id) = n)`: a plain join on `skill_id IN (...)` would return any
      user holding ONE of the skills (union semantics)
    - Returns a ColumnElement, not a Select: the listing service reuses the same
      predicate for the count query and the page query
"""

from collections.abc import Collection

from sqlalchemy import and_, func, select, true
from sqlalchemy.sql.elements import ColumnElement

from roster.core.domain_types import SkillId
from roster.core.query_state import FilterState, end_of_day, start_of_day
from roster.models.user import User
from roster.models.user_skill import user_skills


Predicate = ColumnElement[bool]


def build(filters: FilterState) -> Predicate:
    """Compose every present filter into a single predicate on User."""
    conditions: list[Predicate] = []

    if filters.state is not None:
        conditions.append(User.state == filters.state.value)
    if filters.role is not None:
        conditions.append(User.role == filters.role)
    if filters.skill_ids:
        conditions.append(has_all_skills(filters.skill_ids))
    if filters.from_date is not None:
        conditions.append(User.created_at >= start_of_day(filters.from_date))
    if filters.to_date is not None:
        conditions.append(User.created_at <= end_of_day(filters.to_date))

    if not conditions:
        return true()
    return and_(*conditions)


def has_all_skills(skill_ids: Collection[SkillId]) -> Predicate:
    """Users linked to EVERY skill in skill_ids."""
    wanted = sorted(set(skill_ids))
    matching_users = (
        select(user_skills.c.user_id)
        .where(user_skills.c.skill_id.in_(wanted))
        .group_by(user_skills.c.user_id)
        .having(func.count(func.distinct(user_skills.c.skill_id)) == len(wanted))
    )
    return User.id.in_(matching_users)
