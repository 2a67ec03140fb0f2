# Standard library imports
from uuid import uuid4

# Local application imports
from civictrack.models.issues import IssueStatus
from civictrack.services.issues import moderation_services
from tests.conftest import LA, NYC, auth_headers

ISSUE_PAYLOAD = {
    "title": "Broken streetlight",
    "description": "The streetlight outside number 12 has been dark for a week",
    "category": "electricity",
    "latitude": NYC[0],
    "longitude": NYC[1],
    "address": "12 Elm Street",
}


async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["database"] == "connected"
    assert "X-Request-ID" in response.headers


async def test_create_issue(client, reporter):
    response = await client.post("/api/v1/issues", json=ISSUE_PAYLOAD, headers=auth_headers(reporter))

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "reported"
    assert body["category"] == "electricity"
    assert body["reporter"]["username"] == "reporter"
    assert body["location"]["address"] == "12 Elm Street"
    assert [log["comment"] for log in body["status_logs"]] == ["Issue reported"]


async def test_create_issue_requires_authentication(client):
    response = await client.post("/api/v1/issues", json=ISSUE_PAYLOAD)

    assert response.status_code == 401
    assert response.json() == {
        "ok": False,
        "error": {"code": "unauthorized", "message": "Could not validate credentials"},
    }


async def test_invalid_token_is_rejected(client):
    response = await client.post(
        "/api/v1/issues", json=ISSUE_PAYLOAD, headers={"Authorization": "Bearer not-a-token"}
    )

    assert response.status_code == 401


async def test_invalid_body_is_a_bad_request(client, reporter):
    response = await client.post(
        "/api/v1/issues", json={**ISSUE_PAYLOAD, "latitude": 120}, headers=auth_headers(reporter)
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "bad_request"
    assert error["message"].startswith("latitude:")


async def test_get_unknown_issue(client):
    response = await client.get(f"/api/v1/issues/{uuid4()}")

    assert response.status_code == 404
    assert response.json()["error"] == {"code": "not_found", "message": "Issue not found"}


async def test_list_issues(client, reporter, issue_factory):
    await issue_factory(reporter)
    await issue_factory(reporter, title="Burst water main", category="water")

    response = await client.get("/api/v1/issues", params={"category": "water"})

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["limit"] == 50
    assert [issue["title"] for issue in body["issues"]] == ["Burst water main"]


async def test_nearby(client, reporter, issue_factory):
    nyc = await issue_factory(reporter)
    await issue_factory(reporter, latitude=LA[0], longitude=LA[1])

    response = await client.get(
        "/api/v1/issues/nearby", params={"latitude": NYC[0], "longitude": NYC[1], "radius": 5}
    )

    assert response.status_code == 200
    assert [issue["id"] for issue in response.json()] == [str(nyc.id)]


async def test_nearby_radius_is_bounded(client):
    response = await client.get("/api/v1/issues/nearby", params={"latitude": 0, "longitude": 0, "radius": 500})

    assert response.status_code == 400


async def test_statistics(client, reporter, admin, issue_factory):
    await issue_factory(reporter)

    response = await client.get("/api/v1/issues/statistics", headers=auth_headers(admin))

    assert response.status_code == 200
    assert response.json()["by_status"] == {"reported": 1}


async def test_statistics_are_admin_only(client, reporter, issue_factory):
    await issue_factory(reporter)

    assert (await client.get("/api/v1/issues/statistics")).status_code == 401
    response = await client.get("/api/v1/issues/statistics", headers=auth_headers(reporter))
    assert response.status_code == 403


async def test_change_status(client, reporter, issue_factory):
    issue = await issue_factory(reporter)

    response = await client.put(
        f"/api/v1/issues/{issue.id}/status",
        json={"status": "in_progress", "comment": "Crew dispatched"},
        headers=auth_headers(reporter),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "in_progress"
    assert body["status_logs"][0]["comment"] == "Crew dispatched"


async def test_change_status_by_other_user_is_forbidden(client, reporter, neighbor, issue_factory):
    issue = await issue_factory(reporter)

    response = await client.put(
        f"/api/v1/issues/{issue.id}/status", json={"status": "closed"}, headers=auth_headers(neighbor)
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "forbidden"
    detail = (await client.get(f"/api/v1/issues/{issue.id}")).json()
    assert detail["status"] == IssueStatus.REPORTED.value
    assert len(detail["status_logs"]) == 1


async def test_update_issue(client, reporter, issue_factory):
    issue = await issue_factory(reporter, photos=["a.jpg"])

    response = await client.patch(
        f"/api/v1/issues/{issue.id}",
        json={"title": "Pothole getting bigger", "photos": ["b.jpg"]},
        headers=auth_headers(reporter),
    )

    assert response.status_code == 200
    assert response.json()["title"] == "Pothole getting bigger"
    assert response.json()["photos"] == ["a.jpg", "b.jpg"]


async def test_delete_issue(client, reporter, issue_factory):
    issue = await issue_factory(reporter)

    response = await client.delete(f"/api/v1/issues/{issue.id}", headers=auth_headers(reporter))

    assert response.status_code == 200
    assert response.json() == {"ok": True, "data": {"message": "Issue deleted successfully"}}
    assert (await client.get(f"/api/v1/issues/{issue.id}")).status_code == 404


async def test_flag_twice_is_a_conflict(client, reporter, neighbor, issue_factory):
    issue = await issue_factory(reporter)
    url = f"/api/v1/issues/{issue.id}/flag"

    first = await client.post(url, json={"reason": "Looks like spam"}, headers=auth_headers(neighbor))
    second = await client.post(url, json={"reason": "Looks like spam"}, headers=auth_headers(neighbor))

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "conflict"
    flags = (await client.get(f"/api/v1/issues/{issue.id}/flags")).json()
    assert len(flags) == 1


async def test_moderation_queue_is_admin_only(client, db, reporter, neighbor, admin, issue_factory):
    issue = await issue_factory(reporter)
    flag = await moderation_services.flag_issue(db, issue.id, neighbor, "Looks like spam")

    assert (await client.get("/api/v1/flags", headers=auth_headers(neighbor))).status_code == 403

    queue = await client.get("/api/v1/flags", headers=auth_headers(admin))
    assert [item["id"] for item in queue.json()] == [str(flag.id)]

    resolved = await client.put(f"/api/v1/flags/{flag.id}/resolve", headers=auth_headers(admin))
    assert resolved.status_code == 200
    assert resolved.json()["resolved"] is True
    assert (await client.get("/api/v1/flags", headers=auth_headers(admin))).json() == []
