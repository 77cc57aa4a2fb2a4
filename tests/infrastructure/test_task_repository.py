"""Task Repository — pagination arithmetic and search filters against SQLite.

Tests:
    - 15 rows, page 1, limit 5 → 5 rows, total 15, 3 pages, next, no prev
    - 7 rows, page 3, limit 3 → 1 row, no next, prev
    - 0 rows → empty page, total 0, total_pages 0
    - Text search is case-insensitive over title OR description, wildcards literal
    - Status (single or list), assignee and inclusive date range are AND-combined
"""

from uuid import uuid4

import pytest

from todo_api.core.domain_types import utc_now
from todo_api.core.errors import TaskNotFoundError
from todo_api.core.task import Task, TaskPageOptions, TaskSearchParams


@pytest.fixture
def seed(task_repo, task_record, minutes_ago):
    """Insert n tasks; task i is created i minutes ago (task 0 is newest)."""
    async def _seed(n: int, **overrides) -> list[Task]:
        tasks = []
        for i in range(n):
            fields = {"title": f"Task {i}", "created_at": minutes_ago(i), **overrides}
            tasks.append(await task_repo.add(Task.create(task_record(**fields))))
        return tasks
    return _seed


async def test_first_page_of_fifteen(task_repo, seed):
    tasks = await seed(15)
    page = await task_repo.fetch_paginated(TaskPageOptions(page=1, limit=5))
    assert [t.id for t in page.data] == [t.id for t in tasks[:5]]
    meta = page.pagination
    assert (meta.total, meta.total_pages, meta.has_next, meta.has_prev) == (
        15, 3, True, False,
    )


async def test_partial_last_page(task_repo, seed):
    tasks = await seed(7)
    page = await task_repo.fetch_paginated(TaskPageOptions(page=3, limit=3))
    assert [t.id for t in page.data] == [tasks[6].id]
    assert page.pagination.has_next is False
    assert page.pagination.has_prev is True


async def test_empty_table(task_repo):
    page = await task_repo.fetch_paginated(TaskPageOptions())
    assert page.data == []
    assert page.pagination.total == 0
    assert page.pagination.total_pages == 0
    assert page.pagination.has_next is False


async def test_ascending_order(task_repo, seed):
    tasks = await seed(3)
    page = await task_repo.fetch_paginated(TaskPageOptions(sort_order="asc"))
    assert [t.id for t in page.data] == [t.id for t in reversed(tasks)]


async def test_ties_broken_by_id(task_repo, task_record):
    same_time = utc_now()
    for _ in range(4):
        await task_repo.add(Task.create(task_record(created_at=same_time)))
    page = await task_repo.fetch_paginated(TaskPageOptions())
    ids = [t.id for t in page.data]
    assert ids == sorted(ids, reverse=True)


async def test_search_text_matches_title_or_description(task_repo, task_record):
    alpha_title = await task_repo.add(Task.create(task_record(title="Alpha launch")))
    alpha_desc = await task_repo.add(Task.create(task_record(
        title="Prepare slides",
        description="Slides for the ALPHA review meeting with the whole product team.",
    )))
    await task_repo.add(Task.create(task_record(title="Beta cleanup")))

    page = await task_repo.search(TaskSearchParams(text="alpha"))

    assert {t.id for t in page.data} == {alpha_title.id, alpha_desc.id}
    assert page.pagination.total == 2


async def test_search_text_wildcards_are_literal(task_repo, task_record):
    await task_repo.add(Task.create(task_record(title="Raise to 100%")))
    await task_repo.add(Task.create(task_record(title="Raise to 1000")))
    page = await task_repo.search(TaskSearchParams(text="100%"))
    assert [t.title for t in page.data] == ["Raise to 100%"]


async def test_search_by_status_single_and_list(task_repo, task_record):
    await task_repo.add(Task.create(task_record(status="TODO")))
    await task_repo.add(Task.create(task_record(status="IN_PROGRESS")))
    await task_repo.add(Task.create(task_record(status="DONE")))

    done = await task_repo.search(TaskSearchParams(status="DONE"))
    open_ = await task_repo.search(TaskSearchParams(status=["TODO", "IN_PROGRESS"]))

    assert [t.status for t in done.data] == ["DONE"]
    assert {t.status for t in open_.data} == {"TODO", "IN_PROGRESS"}


async def test_search_by_assignee_and_text_combined(task_repo, task_record):
    owner = str(uuid4())
    mine = await task_repo.add(Task.create(task_record(title="Alpha", assignee_id=owner)))
    await task_repo.add(Task.create(task_record(title="Alpha")))
    await task_repo.add(Task.create(task_record(title="Gamma", assignee_id=owner)))

    page = await task_repo.search(TaskSearchParams(text="alpha", assignee_id=owner))

    assert [t.id for t in page.data] == [mine.id]


async def test_search_date_range_is_inclusive(task_repo, seed, minutes_ago):
    tasks = await seed(5)
    params = TaskSearchParams(
        created_from=tasks[3].created_at, created_to=tasks[1].created_at,
    )
    page = await task_repo.search(params)
    assert [t.id for t in page.data] == [tasks[1].id, tasks[2].id, tasks[3].id]


async def test_search_open_ended_range(task_repo, seed):
    tasks = await seed(4)
    page = await task_repo.search(TaskSearchParams(created_from=tasks[1].created_at))
    assert [t.id for t in page.data] == [tasks[0].id, tasks[1].id]


async def test_search_without_filters_returns_everything(task_repo, seed):
    await seed(3)
    page = await task_repo.search(TaskSearchParams())
    assert page.pagination.total == 3


async def test_update_and_delete_missing_task(task_repo, task_record):
    missing = Task.create(task_record())
    with pytest.raises(TaskNotFoundError):
        await task_repo.update(missing)
    with pytest.raises(TaskNotFoundError):
        await task_repo.delete_by_id(missing.id)


async def test_description_none_round_trips(task_repo, task_record):
    task = await task_repo.add(Task.create(task_record(description=None)))
    fetched = await task_repo.fetch_by_id(task.id)
    assert fetched.description is None
    assert fetched == task
