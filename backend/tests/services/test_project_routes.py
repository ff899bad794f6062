"""Project Routes: create, read, update, delete and override validation.

Invariants:
    - Unknown override keys and contradictory thresholds -> 400 INVALID_VALIDATION_CONFIG
    - Missing projects -> 404 RESOURCE_NOT_FOUND
    - Malformed ids and bodies -> 400 VALIDATION_ERROR
"""

from uuid import uuid4


async def test_create_project_returns_201(client):
    res = await client.post("/api/v1/projects", json={
        "name": "  Interview scheduler  ",
        "beachhead_segment_name": "first-time founders",
        "validation_overrides": {"minimum_beachhead_interviews": 3},
    })
    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "Interview scheduler"
    assert body["beachhead_segment_name"] == "first-time founders"
    assert body["validation_overrides"] == {"minimum_beachhead_interviews": 3}


async def test_blank_name_rejected(client):
    res = await client.post("/api/v1/projects", json={"name": "   "})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_unknown_override_key_rejected(client):
    res = await client.post("/api/v1/projects", json={
        "name": "p", "validation_overrides": {"support_ratio": 0.5},
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_VALIDATION_CONFIG"


async def test_contradictory_override_rejected(client):
    res = await client.post("/api/v1/projects", json={
        "name": "p", "validation_overrides": {"minimum_support_ratio": 0.2},
    })
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "INVALID_VALIDATION_CONFIG"
    assert "below minimum_support_ratio" in error["message"]


async def test_get_project(client, project):
    res = await client.get(f"/api/v1/projects/{project['id']}")
    assert res.status_code == 200
    assert res.json()["id"] == project["id"]


async def test_get_missing_project_returns_404(client):
    res = await client.get(f"/api/v1/projects/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_malformed_project_id_returns_400(client):
    res = await client.get("/api/v1/projects/not-a-uuid")
    assert res.status_code == 400


async def test_patch_updates_beachhead(client, project):
    res = await client.patch(
        f"/api/v1/projects/{project['id']}",
        json={"beachhead_segment_name": "bootcamp graduates"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["beachhead_segment_name"] == "bootcamp graduates"
    assert body["name"] == project["name"]


async def test_patch_null_clears_beachhead(client, project):
    res = await client.patch(
        f"/api/v1/projects/{project['id']}", json={"beachhead_segment_name": None},
    )
    assert res.json()["beachhead_segment_name"] is None


async def test_patch_omitted_beachhead_is_kept(client, project):
    res = await client.patch(
        f"/api/v1/projects/{project['id']}", json={"name": "Renamed"},
    )
    body = res.json()
    assert body["name"] == "Renamed"
    assert body["beachhead_segment_name"] == "first-time founders"


async def test_patch_rejects_bad_overrides(client, project):
    res = await client.patch(
        f"/api/v1/projects/{project['id']}",
        json={"validation_overrides": {"stage1_min_interviews": 0}},
    )
    assert res.status_code == 400


async def test_delete_project_cascades(client, project, create_assumption):
    await create_assumption()
    res = await client.delete(f"/api/v1/projects/{project['id']}")
    assert res.status_code == 204

    assert (await client.get(f"/api/v1/projects/{project['id']}")).status_code == 404
    res = await client.get(f"/api/v1/projects/{project['id']}/assumptions")
    assert res.status_code == 404


async def test_delete_missing_project_returns_404(client):
    res = await client.delete(f"/api/v1/projects/{uuid4()}")
    assert res.status_code == 404


async def test_health(client):
    res = await client.get("/api/v1/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"

    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 200
    assert res.json()["checks"]["database"] == "healthy"
