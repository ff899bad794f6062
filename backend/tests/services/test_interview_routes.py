"""Interview Routes: recording interviews and folding tags into assumptions.

Invariants:
    - POST nudges confidence, appends evidence, bumps interview_count once per assumption
    - Tags for unknown or foreign assumptions -> 400 UNKNOWN_ASSUMPTION, nothing saved
    - PATCH / DELETE recount interview_count without replaying confidence nudges
"""

from uuid import uuid4


def _url(project, suffix=""):
    return f"/api/v1/projects/{project['id']}/interviews{suffix}"


async def _assumption(client, project, assumption_id):
    res = await client.get(f"/api/v1/projects/{project['id']}/assumptions/{assumption_id}")
    return res.json()


async def test_create_interview_applies_tags(
    client, project, create_assumption, create_interview,
):
    target = await create_assumption(confidence=3, importance=5)
    interview = await create_interview(
        target["id"], change=1, day=9, memorable_quotes=["We lose a week per hire"],
    )
    assert interview["interview_date"] == "2026-03-09"
    assert interview["assumption_tags"][0]["confidence_change"] == 1
    assert interview["memorable_quotes"] == ["We lose a week per hire"]

    updated = await _assumption(client, project, target["id"])
    assert updated["confidence"] == 4
    assert updated["risk_score"] == 10
    assert updated["priority"] == "medium"
    assert updated["interview_count"] == 1
    assert updated["last_tested_date"] == "2026-03-09"
    assert updated["evidence"] == ["Interview 2026-03-09: supports (No quote)"]
    assert updated["status"] == "untested"


async def test_confidence_nudge_is_clamped(client, project, create_assumption, create_interview):
    target = await create_assumption(confidence=5)
    await create_interview(target["id"], change=2)
    assert (await _assumption(client, project, target["id"]))["confidence"] == 5


async def test_unknown_tag_target_rejected(client, project, create_assumption):
    await create_assumption()
    res = await client.post(_url(project), json={
        "segment_name": "first-time founders",
        "interview_date": "2026-03-01",
        "assumption_tags": [{"assumption_id": str(uuid4()), "validation_effect": "supports"}],
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "UNKNOWN_ASSUMPTION"
    assert (await client.get(_url(project))).json() == []


async def test_foreign_assumption_tag_rejected(client, project):
    other = (await client.post("/api/v1/projects", json={"name": "Other"})).json()
    foreign = (await client.post(f"/api/v1/projects/{other['id']}/assumptions", json={
        "type": "customer", "description": "x", "canvas_area": "customerSegments",
    })).json()

    res = await client.post(_url(project), json={
        "segment_name": "first-time founders",
        "interview_date": "2026-03-01",
        "assumption_tags": [{"assumption_id": foreign["id"]}],
    })
    assert res.status_code == 400


async def test_confidence_change_out_of_range_rejected(client, project, create_assumption):
    target = await create_assumption()
    res = await client.post(_url(project), json={
        "segment_name": "first-time founders",
        "interview_date": "2026-03-01",
        "assumption_tags": [{"assumption_id": target["id"], "confidence_change": 3}],
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_problem_importance_out_of_range_rejected(client, project):
    res = await client.post(_url(project), json={
        "segment_name": "first-time founders",
        "interview_date": "2026-03-01",
        "problem_importance": 0,
    })
    assert res.status_code == 400


async def test_list_and_get_interviews(client, project, create_interview):
    first = await create_interview(day=2)
    second = await create_interview(day=1, segment="professors")

    res = await client.get(_url(project))
    assert [i["id"] for i in res.json()] == [second["id"], first["id"]]

    res = await client.get(_url(project, f"/{first['id']}"))
    assert res.status_code == 200
    assert res.json()["segment_name"] == "first-time founders"


async def test_get_missing_interview_returns_404(client, project):
    res = await client.get(_url(project, f"/{uuid4()}"))
    assert res.status_code == 404


async def test_patch_replaces_tags_and_recounts(
    client, project, create_assumption, create_interview,
):
    target = await create_assumption(confidence=3)
    interview = await create_interview(target["id"], change=1)

    res = await client.patch(
        _url(project, f"/{interview['id']}"),
        json={"assumption_tags": [], "context": "Follow-up call"},
    )
    assert res.status_code == 200
    assert res.json()["assumption_tags"] == []
    assert res.json()["context"] == "Follow-up call"

    updated = await _assumption(client, project, target["id"])
    assert updated["interview_count"] == 0
    assert updated["confidence"] == 4


async def test_patch_keeps_omitted_fields(client, project, create_interview):
    interview = await create_interview(matches_beachhead=True)
    res = await client.patch(
        _url(project, f"/{interview['id']}"), json={"segment_name": "professors"},
    )
    body = res.json()
    assert body["segment_name"] == "professors"
    assert body["interview_date"] == interview["interview_date"]
    assert body["matches_beachhead"] is True


async def test_delete_interview_recounts(
    client, project, create_assumption, create_interview,
):
    target = await create_assumption()
    interview = await create_interview(target["id"])
    await create_interview(target["id"], day=2)

    res = await client.delete(_url(project, f"/{interview['id']}"))
    assert res.status_code == 204
    assert (await _assumption(client, project, target["id"]))["interview_count"] == 1
