async def create_user(client, name):
    response = await client.post("/users/", json={"name": name})
    assert response.status_code == 201, response.text
    return response.json()


async def create_task(client, user_id, title="Ship v1", content="Release", status=None):
    payload = {"title": title, "content": content, "user_id": user_id}
    if status:
        payload["status"] = status
    response = await client.post("/tasks/", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def test_root(client):
    response = await client.get("/")
    assert response.status_code == 200


async def test_bob_scenario_over_http(client):
    bob = await create_user(client, "Bob")
    task = await create_task(client, bob["id"])
    assert task["status"] == "UNFINISHED"

    response = await client.put(
        f"/users/{bob['id']}/tasks/{task['id']}/status", json={"status": "IN_PROGRESS"}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "IN_PROGRESS"

    response = await client.get(f"/users/{bob['id']}")
    detail = response.json()
    assert detail["summary"]["status_counts"]["IN_PROGRESS"] == 1
    assert [t["id"] for t in detail["tasks"]] == [task["id"]]

    response = await client.delete(f"/users/{bob['id']}")
    assert response.status_code == 200
    assert response.json()["deleted_task_ids"] == [task["id"]]

    assert (await client.get(f"/users/{bob['id']}")).status_code == 404
    assert (await client.get(f"/tasks/{task['id']}")).status_code == 404


async def test_user_detail_lists_newest_task_first(client):
    ann = await create_user(client, "Ann")
    first = await create_task(client, ann["id"], title="First")
    second = await create_task(client, ann["id"], title="Second", status="FINISHED")

    detail = (await client.get(f"/users/{ann['id']}")).json()
    assert [t["id"] for t in detail["tasks"]] == [second["id"], first["id"]]
    assert detail["summary"] == {
        "total_tasks": 2,
        "status_counts": {"UNFINISHED": 1, "IN_PROGRESS": 0, "FINISHED": 1},
        "completion_percentage": 50.0,
    }


async def test_list_users_with_counts_and_name_order(client):
    zed = await create_user(client, "Zed")
    await create_user(client, "Amy")
    await create_task(client, zed["id"])

    users = (await client.get("/users/")).json()
    assert [u["name"] for u in users] == ["Zed", "Amy"]
    assert users[0]["summary"]["total_tasks"] == 1
    assert users[1]["summary"]["total_tasks"] == 0

    by_name = (await client.get("/users/", params={"order_by": "name"})).json()
    assert [u["name"] for u in by_name] == ["Amy", "Zed"]

    assert (await client.get("/users/", params={"order_by": "age"})).status_code == 400


async def test_validation_errors_are_400(client):
    response = await client.post("/users/", json={"name": "   "})
    assert response.status_code == 400
    assert response.json() == {"detail": "Name is required", "error": "validation"}

    bob = await create_user(client, "Bob")
    response = await client.post("/tasks/", json={"title": "   ", "content": "x", "user_id": bob["id"]})
    assert response.status_code == 400
    assert response.json()["detail"] == "Title is required"

    response = await client.post("/tasks/", json={"title": "x", "content": "x"})
    assert response.status_code == 400
    assert response.json()["detail"] == "Please select a user"

    response = await client.put(f"/users/{bob['id']}/tasks/1/status", json={"status": "DONE"})
    assert response.status_code == 400


async def test_malformed_requests_are_400(client):
    assert (await client.get("/users/not-a-number")).status_code == 400
    response = await client.post("/users/", content=b"{not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json()["error"] == "validation"


async def test_duplicate_name_is_400_conflict(client):
    await create_user(client, "Alice")
    response = await client.post("/users/", json={"name": "Alice"})
    assert response.status_code == 400
    assert response.json() == {"detail": "A user with this name already exists", "error": "conflict"}

    users = (await client.get("/users/")).json()
    assert [u["name"] for u in users].count("Alice") == 1


async def test_rename_user(client):
    bob = await create_user(client, "Bob")
    await create_user(client, "Alice")

    response = await client.patch(f"/users/{bob['id']}", json={"name": "Robert"})
    assert response.status_code == 200
    assert response.json()["name"] == "Robert"

    response = await client.patch(f"/users/{bob['id']}", json={"name": "Alice"})
    assert response.status_code == 400
    assert response.json()["error"] == "conflict"

    assert (await client.patch("/users/999", json={"name": "Ghost"})).status_code == 404


async def test_status_change_for_someone_elses_task_is_404(client):
    owner = await create_user(client, "Owner")
    other = await create_user(client, "Other")
    task = await create_task(client, owner["id"])

    response = await client.put(
        f"/users/{other['id']}/tasks/{task['id']}/status", json={"status": "FINISHED"}
    )
    assert response.status_code == 404
    assert response.json()["detail"] == "Task not found or does not belong to this user"

    assert (await client.get(f"/tasks/{task['id']}")).json()["status"] == "UNFINISHED"


async def test_delete_unknown_user_is_404(client):
    response = await client.delete("/users/12345")
    assert response.status_code == 404
    assert response.json() == {"detail": "User not found", "error": "not_found"}


async def test_task_for_unknown_user_is_404(client):
    response = await client.post("/tasks/", json={"title": "x", "content": "y", "user_id": 777})
    assert response.status_code == 404


async def test_odd_user_ids_in_task_body_are_400(client, count_rows):
    from app.models.tasks import Task

    for user_id in ("²", "9" * 40, str(2**63), 0):
        response = await client.post("/tasks/", json={"title": "x", "content": "y", "user_id": user_id})
        assert response.status_code == 400, user_id
        assert response.json() == {"detail": "Please select a user", "error": "validation"}
    assert await count_rows(Task) == 0


async def test_out_of_range_path_ids_are_400(client):
    huge = "9" * 25
    assert (await client.delete(f"/users/{huge}")).status_code == 400
    assert (await client.get(f"/users/{huge}")).status_code == 400
    assert (await client.patch(f"/users/{huge}", json={"name": "Big"})).status_code == 400
    assert (await client.get(f"/tasks/{huge}")).status_code == 400
    response = await client.put(f"/users/1/tasks/{huge}/status", json={"status": "FINISHED"})
    assert response.status_code == 400
    assert response.json()["error"] == "validation"
    assert (await client.delete("/users/0")).status_code == 400
