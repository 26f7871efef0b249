"""Department routes — views with head, head assignment and its conflicts.

Tests:
    - List returns each department with its head (or null)
    - Assign head: success, unknown teacher → 404, unknown department → 404
    - A teacher already heading another department → 409, nothing changes
"""


async def test_create_department(client):
    resp = await client.post("/api/v1/departments", json={"name": "Chemistry"})
    assert resp.status_code == 201
    assert resp.json()["head_of_department_id"] is None


async def test_list_departments(client, seed):
    resp = await client.get("/api/v1/departments")
    assert resp.status_code == 200
    maths, physics = resp.json()
    assert maths["head_of_department"]["name"] == "Alan Turing"
    assert physics["head_of_department"] is None


async def test_assign_head(client, seed):
    resp = await client.post(
        f"/api/v1/departments/{seed['physics']}/teacher/{seed['hopper']}",
    )
    assert resp.status_code == 200
    assert resp.json()["head_of_department"]["id"] == seed["hopper"]

    teacher = await client.get(f"/api/v1/teachers/{seed['hopper']}")
    assert teacher.json()["department"]["name"] == "Physics"


async def test_assign_head_unknown_teacher(client, seed):
    resp = await client.post(f"/api/v1/departments/{seed['physics']}/teacher/999")
    assert resp.status_code == 404


async def test_assign_head_unknown_department(client, seed):
    resp = await client.post(f"/api/v1/departments/999/teacher/{seed['hopper']}")
    assert resp.status_code == 404
    assert resp.json()["error"]["context"]["entity_kind"] == "department"


async def test_assign_head_already_heading_elsewhere(client, seed):
    resp = await client.post(
        f"/api/v1/departments/{seed['physics']}/teacher/{seed['turing']}",
    )
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "CONSTRAINT_VIOLATION"

    physics = await client.get(f"/api/v1/departments/{seed['physics']}")
    assert physics.json()["head_of_department"] is None


async def test_reassign_same_head(client, seed):
    resp = await client.post(
        f"/api/v1/departments/{seed['mathematics']}/teacher/{seed['turing']}",
    )
    assert resp.status_code == 200


async def test_delete_department(client, seed):
    resp = await client.delete(f"/api/v1/departments/{seed['mathematics']}")
    assert resp.status_code == 204

    teacher = await client.get(f"/api/v1/teachers/{seed['turing']}")
    assert teacher.json()["department"] is None
