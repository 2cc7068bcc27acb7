"""GET /api/v1/users — end-to-end listing through the HTTP surface.

Tests cover:
    - state, role, skills[N] and date filters from the query string
    - pagination at the configured page size
    - sort links: classes, toggle, preserved filters, page reset
    - malformed parameters are ignored, never a 4xx
"""

from datetime import datetime

from urllib.parse import parse_qsl, urlsplit


URL = "/api/v1/users"


def _ids(response) -> set[int]:
    return {u["id"] for u in response.json()["users"]}


async def test_lists_users_with_skills(client, user_factory, skill_factory):
    php = await skill_factory("php")
    user = await user_factory(first_name="Ada", last_name="Lovelace", skills=[php])

    res = await client.get(URL)

    assert res.status_code == 200
    body = res.json()
    assert body["users"] == [{
        "id": user.id,
        "first_name": "Ada",
        "last_name": "Lovelace",
        "full_name": "Ada Lovelace",
        "email": user.email,
        "role": "user",
        "state": "active",
        "created_at": body["users"][0]["created_at"],
        "skills": [{"id": php.id, "name": "php"}],
    }]
    assert body["pagination"] == {"page": 1, "page_size": 20, "total": 1, "last_page": 1}
    assert body["sort"] == {"column": None, "direction": "asc"}


async def test_filter_users_by_state(client, user_factory):
    active = await user_factory()
    inactive = await user_factory(state="inactive")

    res = await client.get(URL, params={"state": "active"})
    assert _ids(res) == {active.id}

    res = await client.get(URL, params={"state": "inactive"})
    assert _ids(res) == {inactive.id}


async def test_filter_users_by_role(client, user_factory):
    admin = await user_factory(role="admin")
    user = await user_factory(role="user")

    assert _ids(await client.get(URL, params={"role": "admin"})) == {admin.id}
    assert _ids(await client.get(URL, params={"role": "user"})) == {user.id}


async def test_filter_users_by_indexed_skills(client, user_factory, skill_factory):
    php = await skill_factory("php")
    css = await skill_factory("css")
    await user_factory(skills=[php])
    full_stack_dev = await user_factory(skills=[php, css])
    await user_factory(skills=[css])

    res = await client.get(URL, params=[("skills[0]", php.id), ("skills[1]", css.id)])

    assert res.status_code == 200
    assert _ids(res) == {full_stack_dev.id}
    assert res.json()["filters"]["skills"] == sorted([php.id, css.id])


async def test_filter_users_created_between_dates(client, user_factory):
    newest = await user_factory(created_at=datetime(2018, 10, 2, 12, 0, 0))
    oldest = await user_factory(created_at=datetime(2018, 9, 29, 12, 0, 0))
    new = await user_factory(created_at=datetime(2018, 10, 1, 0, 0, 0))
    old = await user_factory(created_at=datetime(2018, 9, 30, 23, 59, 59))

    res = await client.get(URL, params={"from": "01/10/2018"})
    assert _ids(res) == {new.id, newest.id}
    assert res.json()["filters"]["from"] == "01/10/2018"

    res = await client.get(URL, params={"to": "30/09/2018"})
    assert _ids(res) == {old.id, oldest.id}


async def test_paginates_users_filtered_by_php_skill(client, user_factory, skill_factory):
    php = await skill_factory("php")
    css = await skill_factory("css")
    for _ in range(40):
        await user_factory(skills=[php])
    for _ in range(20):
        await user_factory(skills=[css])

    first = await client.get(URL, params=[("skills[0]", php.id), ("order", "email")])
    second = await client.get(
        URL, params=[("skills[0]", php.id), ("order", "email"), ("page", "2")],
    )

    assert first.status_code == 200 and second.status_code == 200
    first_users = first.json()["users"]
    second_users = second.json()["users"]
    assert len(first_users) == 20 and len(second_users) == 20
    assert not {u["id"] for u in first_users} & {u["id"] for u in second_users}
    assert all(
        "php" in [s["name"] for s in u["skills"]]
        for u in first_users + second_users
    )
    emails = [u["email"] for u in first_users + second_users]
    assert emails == sorted(emails)
    assert second.json()["pagination"]["page"] == 2


async def test_sort_links_toggle_and_preserve_filters(client, user_factory):
    await user_factory()

    res = await client.get(
        URL, params=[("state", "active"), ("page", "3"), ("order", "email")],
    )
    links = res.json()["sort_links"]

    assert links["email"]["classes"] == "link-sortable link-sorted-up"
    assert links["role"]["classes"] == "link-sortable"

    email_url = urlsplit(links["email"]["url"])
    assert f"{email_url.scheme}://{email_url.netloc}{email_url.path}" == "http://test/api/v1/users"
    assert parse_qsl(email_url.query) == [("state", "active"), ("order", "email-desc")]
    assert parse_qsl(urlsplit(links["role"]["url"]).query) == [
        ("state", "active"), ("order", "role"),
    ]


async def test_following_a_sort_link_round_trips(client, user_factory):
    await user_factory()

    res = await client.get(URL, params={"order": "first_name-desc", "role": "user"})
    link = res.json()["sort_links"]["first_name"]["url"]

    followed = await client.get(link)
    body = followed.json()
    assert body["sort"] == {"column": "first_name", "direction": "asc"}
    assert body["filters"]["role"] == "user"
    assert body["sort_links"]["first_name"]["classes"] == "link-sortable link-sorted-up"


async def test_sort_links_exist_for_every_sortable_column(client):
    res = await client.get(URL)
    assert set(res.json()["sort_links"]) == {
        "first_name", "last_name", "email", "role", "state", "created_at",
    }


async def test_malformed_parameters_are_ignored(client, user_factory):
    user = await user_factory()

    res = await client.get(URL, params=[
        ("state", "banned"), ("skills[]", "php"), ("from", "2018-10-01"),
        ("page", "zero"), ("order", "password"),
    ])

    assert res.status_code == 200
    assert _ids(res) == {user.id}
    body = res.json()
    assert body["filters"] == {
        "state": None, "role": None, "skills": [], "from": None, "to": None,
    }
    assert body["pagination"]["page"] == 1
    assert body["sort"] == {"column": "password", "direction": "asc"}


async def test_empty_result_is_ok(client, user_factory):
    await user_factory(created_at=datetime(2018, 10, 1, 12, 0, 0))
    res = await client.get(URL, params={"from": "02/10/2018", "to": "01/10/2018"})
    assert res.status_code == 200
    assert res.json()["users"] == []
    assert res.json()["pagination"]["total"] == 0


async def test_oversized_skill_id_is_ignored(client, user_factory, skill_factory):
    php = await skill_factory("php")
    user = await user_factory(skills=[php])

    res = await client.get(URL, params=[("skills[]", "99999999999999999999")])

    assert res.status_code == 200
    assert _ids(res) == {user.id}
    assert res.json()["filters"]["skills"] == []
