"""Tag endpoints."""

TAGS_URL = "/api/v1/tags"
TASKS_URL = "/api/v1/tasks"


async def test_create_tag_with_default_color(client):
    response = await client.post(TAGS_URL, json={"name": "work"})

    assert response.status_code == 201
    tag = response.json()["data"]
    assert tag["name"] == "work"
    assert tag["color"] == "slate"
    assert tag["taskCount"] == 0


async def test_duplicate_tag_name_conflicts(client):
    await client.post(TAGS_URL, json={"name": "work"})

    response = await client.post(TAGS_URL, json={"name": "work"})

    assert response.status_code == 409
    assert response.json()["error"] == "Conflict"


async def test_tag_names_are_case_sensitive(client):
    await client.post(TAGS_URL, json={"name": "work"})

    response = await client.post(TAGS_URL, json={"name": "Work"})

    assert response.status_code == 201


async def test_list_tags_sorted_with_task_counts(client, create_task):
    await create_task(tags=["zeta", "alpha"])
    await create_task(tags=["alpha"])

    response = await client.get(TAGS_URL)

    assert response.status_code == 200
    counts = [(tag["name"], tag["taskCount"]) for tag in response.json()["data"]]
    assert counts == [("alpha", 2), ("zeta", 1)]


async def test_get_tag_by_id(client):
    created = (await client.post(TAGS_URL, json={"name": "home"})).json()["data"]

    response = await client.get(f"{TAGS_URL}/{created['id']}")

    assert response.json()["data"]["name"] == "home"
    assert (await client.get(f"{TAGS_URL}/missing")).status_code == 404


async def test_update_tag(client):
    created = (await client.post(TAGS_URL, json={"name": "home"})).json()["data"]
    await client.post(TAGS_URL, json={"name": "work"})

    recolored = await client.patch(f"{TAGS_URL}/{created['id']}", json={"color": "red"})
    assert recolored.status_code == 200
    assert recolored.json()["data"]["color"] == "red"
    assert recolored.json()["data"]["name"] == "home"

    conflict = await client.patch(f"{TAGS_URL}/{created['id']}", json={"name": "work"})
    assert conflict.status_code == 409

    missing = await client.patch(f"{TAGS_URL}/missing", json={"color": "red"})
    assert missing.status_code == 404


async def test_delete_tag_keeps_tasks(client, create_task):
    task = await create_task(tags=["temp"])
    tag_id = task["tags"][0]["id"]

    response = await client.delete(f"{TAGS_URL}/{tag_id}")

    assert response.status_code == 204
    fetched = (await client.get(f"{TASKS_URL}/{task['id']}")).json()["data"]
    assert fetched["tags"] == []
    assert (await client.delete(f"{TAGS_URL}/{tag_id}")).status_code == 404


async def test_tag_name_length_is_validated(client):
    response = await client.post(TAGS_URL, json={"name": "x" * 51})

    assert response.status_code == 400
    assert response.json()["error"] == "Validation Error"
