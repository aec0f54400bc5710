"""Creating, updating, toggling, deleting and bulk-editing tasks."""

TASKS_URL = "/api/v1/tasks"
TAGS_URL = "/api/v1/tags"


async def test_create_task_appends_to_manual_order(client, create_task):
    first = await create_task(title="First")
    second = await create_task(title="Second")

    assert second["orderIndex"] == first["orderIndex"] + 1
    assert second["priority"] == 2
    assert second["completed"] is False
    assert second["tags"] == []


async def test_create_task_coerces_numeric_priority(client):
    response = await client.post(TASKS_URL, json={"title": "Coerced", "priority": "1"})

    assert response.status_code == 201
    assert response.json()["data"]["priority"] == 1


async def test_whitespace_title_is_accepted(client):
    response = await client.post(TASKS_URL, json={"title": "  "})

    assert response.status_code == 201
    assert response.json()["data"]["title"] == "  "


async def test_create_task_resolves_and_creates_tags(client, create_task):
    await client.post(TAGS_URL, json={"name": "work", "color": "blue"})

    task = await create_task(title="Tagged", tags=["work", "new", "work"])

    tags = {tag["name"]: tag["color"] for tag in task["tags"]}
    assert tags == {"new": "slate", "work": "blue"}
    assert [tag["name"] for tag in task["tags"]] == ["new", "work"]

    all_tags = (await client.get(TAGS_URL)).json()["data"]
    assert [tag["name"] for tag in all_tags] == ["new", "work"]


async def test_create_task_validation_errors(client):
    for body in (
        {},
        {"title": ""},
        {"title": "x" * 501},
        {"title": "ok", "description": "x" * 2001},
        {"title": "ok", "priority": 0},
        {"title": "ok", "dueDate": "not a date"},
        {"title": "ok", "tags": [""]},
    ):
        response = await client.post(TASKS_URL, json=body)
        assert response.status_code == 400, body
        assert response.json()["error"] == "Validation Error"


async def test_get_task_not_found(client):
    response = await client.get(f"{TASKS_URL}/does-not-exist")

    assert response.status_code == 404
    assert response.json() == {
        "error": "Not Found",
        "message": "Task does-not-exist not found",
    }


async def test_partial_update_leaves_omitted_fields(client, create_task):
    task = await create_task(
        title="Original",
        description="Keep me",
        priority=3,
        dueDate="2030-01-01T09:00:00Z",
        tags=["a"],
    )

    response = await client.patch(f"{TASKS_URL}/{task['id']}", json={"title": "Renamed"})

    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["title"] == "Renamed"
    assert updated["description"] == "Keep me"
    assert updated["priority"] == 3
    assert updated["dueDate"].startswith("2030-01-01T09:00:00")
    assert [tag["name"] for tag in updated["tags"]] == ["a"]


async def test_update_can_clear_description_and_due_date(client, create_task):
    task = await create_task(description="Temp", dueDate="2030-01-01T00:00:00")

    response = await client.patch(
        f"{TASKS_URL}/{task['id']}", json={"description": None, "dueDate": None}
    )

    updated = response.json()["data"]
    assert updated["description"] is None
    assert updated["dueDate"] is None


async def test_update_rejects_null_title(client, create_task):
    task = await create_task()

    response = await client.patch(f"{TASKS_URL}/{task['id']}", json={"title": None})

    assert response.status_code == 400


async def test_update_tags_is_a_full_replace(client, create_task):
    task = await create_task(tags=["a", "b"])

    response = await client.patch(f"{TASKS_URL}/{task['id']}", json={"tags": ["c"]})
    assert [tag["name"] for tag in response.json()["data"]["tags"]] == ["c"]

    response = await client.patch(f"{TASKS_URL}/{task['id']}", json={"tags": []})
    assert response.json()["data"]["tags"] == []


async def test_dropped_tag_stays_in_the_vocabulary(client, create_task):
    task = await create_task(tags=["a", "b"])

    response = await client.patch(f"{TASKS_URL}/{task['id']}", json={"tags": ["a"]})
    assert [tag["name"] for tag in response.json()["data"]["tags"]] == ["a"]

    response = await client.get(TAGS_URL)
    counts = [(tag["name"], tag["taskCount"]) for tag in response.json()["data"]]
    assert counts == [("a", 1), ("b", 0)]


async def test_update_missing_task(client):
    response = await client.patch(f"{TASKS_URL}/nope", json={"title": "x"})

    assert response.status_code == 404


async def test_toggle_flips_completion(client, create_task):
    task = await create_task()

    first = await client.patch(f"{TASKS_URL}/{task['id']}/toggle")
    second = await client.patch(f"{TASKS_URL}/{task['id']}/toggle")

    assert first.json()["data"]["completed"] is True
    assert second.json()["data"]["completed"] is False
    assert (await client.patch(f"{TASKS_URL}/nope/toggle")).status_code == 404


async def test_delete_task_removes_tag_links(client, create_task):
    task = await create_task(tags=["work"])

    response = await client.delete(f"{TASKS_URL}/{task['id']}")

    assert response.status_code == 204
    assert response.content == b""
    assert (await client.get(f"{TASKS_URL}/{task['id']}")).status_code == 404
    tags = (await client.get(TAGS_URL)).json()["data"]
    assert tags[0]["taskCount"] == 0
    assert (await client.delete(f"{TASKS_URL}/{task['id']}")).status_code == 404


async def test_bulk_complete_skips_unknown_ids(client, create_task):
    task = await create_task()

    response = await client.post(
        f"{TASKS_URL}/bulk",
        json={"action": "complete", "ids": [task["id"], "does-not-exist"]},
    )

    assert response.status_code == 200
    assert response.json() == {"data": {"success": True, "updatedCount": 1}}
    fetched = (await client.get(f"{TASKS_URL}/{task['id']}")).json()["data"]
    assert fetched["completed"] is True


async def test_bulk_set_priority_requires_priority(client, create_task):
    task = await create_task()

    response = await client.post(
        f"{TASKS_URL}/bulk", json={"action": "setPriority", "ids": [task["id"]]}
    )
    assert response.status_code == 400

    response = await client.post(
        f"{TASKS_URL}/bulk",
        json={"action": "setPriority", "ids": [task["id"]], "priority": 1},
    )
    assert response.json()["data"]["updatedCount"] == 1


async def test_bulk_rejects_unknown_action_and_empty_ids(client):
    unknown = await client.post(f"{TASKS_URL}/bulk", json={"action": "archive", "ids": ["a"]})
    empty = await client.post(f"{TASKS_URL}/bulk", json={"action": "complete", "ids": []})

    assert unknown.status_code == 400
    assert empty.status_code == 400


async def test_bulk_set_tags_replaces_tags_of_every_task(client, create_task):
    first = await create_task(tags=["old", "shared"])
    second = await create_task(tags=["other"])

    response = await client.post(
        f"{TASKS_URL}/bulk",
        json={"action": "setTags", "ids": [first["id"], second["id"]], "tags": ["new"]},
    )

    assert response.json()["data"]["updatedCount"] == 2
    for task in (first, second):
        fetched = (await client.get(f"{TASKS_URL}/{task['id']}")).json()["data"]
        assert [tag["name"] for tag in fetched["tags"]] == ["new"]


async def test_bulk_delete_reports_deleted_count(client, create_task):
    task = await create_task()

    response = await client.post(
        f"{TASKS_URL}/bulk", json={"action": "delete", "ids": [task["id"], "ghost"]}
    )

    assert response.json() == {"data": {"success": True, "deletedCount": 1}}


async def test_clear_completed(client, create_task):
    done = await create_task(title="Done")
    await create_task(title="Open")
    await client.patch(f"{TASKS_URL}/{done['id']}/toggle")

    response = await client.delete(f"{TASKS_URL}/completed")

    assert response.status_code == 200
    assert response.json() == {"data": {"success": True, "deletedCount": 1}}
    remaining = (await client.get(TASKS_URL)).json()["data"]
    assert [task["title"] for task in remaining] == ["Open"]
