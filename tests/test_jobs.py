from app.models.job import Job
from app.services.jobs import _insert_first_view
from tests.conftest import JOB_PAYLOAD, auth


def test_create_job_defaults(client, employer, create_job):
    _, user = employer
    job = create_job(employer[0])
    assert job["status"] == "active"
    assert job["views"] == 0 and job["uniqueViews"] == 0
    assert job["viewHistory"] == []
    assert job["employerId"] == user["id"]
    assert job["employer"] == {"id": user["id"], "name": "Erin Employer"}
    assert set(job["analyticsData"]) == {
        "viewsByDate", "applicationsByDate", "applicationsByStatus", "timeOfDayData", "sourceBreakdown",
    }


def test_create_job_strips_whitespace(employer, create_job):
    job = create_job(employer[0], title="  Staff Engineer  ")
    assert job["title"] == "Staff Engineer"


def test_jobseeker_cannot_create_job(client, seeker):
    res = client.post("/api/jobs", json=JOB_PAYLOAD, headers=auth(seeker[0]))
    assert res.status_code == 403


def test_create_job_requires_token(client):
    assert client.post("/api/jobs", json=JOB_PAYLOAD).status_code == 401


def test_create_job_validates_enums(client, employer):
    res = client.post("/api/jobs", json={**JOB_PAYLOAD, "type": "gig"}, headers=auth(employer[0]))
    assert res.status_code == 400
    res = client.post("/api/jobs", json={**JOB_PAYLOAD, "experience": "guru"}, headers=auth(employer[0]))
    assert res.status_code == 400


def test_listing_only_returns_active_jobs(client, employer, create_job):
    token = employer[0]
    create_job(token, title="Open role")
    create_job(token, title="Closed role", status="closed")
    create_job(token, title="Draft role", status="draft")

    jobs = client.get("/api/jobs").json()
    assert [j["title"] for j in jobs] == ["Open role"]
    assert all(j["status"] == "active" for j in jobs)


def test_listing_is_newest_first(client, employer, create_job):
    first = create_job(employer[0], title="First")
    second = create_job(employer[0], title="Second")
    ids = [j["id"] for j in client.get("/api/jobs").json()]
    assert ids == [second["id"], first["id"]]


def test_listing_filters(client, employer, create_job):
    token = employer[0]
    create_job(token, title="Python Developer", location="Remote", type="contract")
    create_job(token, title="Designer", company="PixelWorks", experience="senior")

    assert [j["title"] for j in client.get("/api/jobs", params={"search": "python"}).json()] == ["Python Developer"]
    assert [j["title"] for j in client.get("/api/jobs", params={"search": "pixel"}).json()] == ["Designer"]
    assert [j["title"] for j in client.get("/api/jobs", params={"search": "REMOTE"}).json()] == ["Python Developer"]
    assert [j["title"] for j in client.get("/api/jobs", params={"type": "contract"}).json()] == ["Python Developer"]
    assert [j["title"] for j in client.get("/api/jobs", params={"experience": "senior"}).json()] == ["Designer"]
    assert client.get("/api/jobs", params={"search": "%"}).json() == []
    assert client.get("/api/jobs", params={"type": "gig"}).status_code == 400


def test_listing_is_annotated_for_signed_in_users(client, employer, seeker, create_job):
    applied = create_job(employer[0], title="Applied")
    other = create_job(employer[0], title="Other")
    client.post(f"/api/jobs/{applied['id']}/apply", headers=auth(seeker[0]))

    by_id = {j["id"]: j for j in client.get("/api/jobs", headers=auth(seeker[0])).json()}
    assert by_id[applied["id"]]["isApplied"] is True
    assert by_id[applied["id"]]["applicationStatus"] == "pending"
    assert by_id[other["id"]]["isApplied"] is False
    assert by_id[other["id"]]["applicationStatus"] is None

    anonymous = client.get("/api/jobs").json()
    assert all(j["isApplied"] is False for j in anonymous)


def test_listing_ignores_bad_token(client, employer, create_job):
    create_job(employer[0])
    res = client.get("/api/jobs", headers=auth("expired-or-garbage"))
    assert res.status_code == 200
    assert len(res.json()) == 1


def test_jobs_by_employer(client, register, create_job):
    a_token, a_user = register("a@corp.com", role="employer")
    b_token, _ = register("b@corp.com", role="employer")
    create_job(a_token, title="A1")
    create_job(a_token, title="A2", status="draft")
    create_job(b_token, title="B1")

    titles = [j["title"] for j in client.get(f"/api/jobs/employer/{a_user['id']}").json()]
    assert titles == ["A2", "A1"]


def test_anonymous_detail_does_not_count_views(client, employer, create_job):
    job = create_job(employer[0])
    body = client.get(f"/api/jobs/{job['id']}").json()
    assert body["stats"] == {"views": 0, "uniqueViews": 0, "applicationCount": 0}


def test_repeat_views_count_once_as_unique(client, employer, seeker, create_job):
    job = create_job(employer[0])
    for _ in range(3):
        res = client.get(f"/api/jobs/{job['id']}", headers=auth(seeker[0]))
        assert res.status_code == 200

    body = res.json()
    assert body["views"] == 3
    assert body["uniqueViews"] == 1
    assert body["stats"]["views"] == 3 and body["stats"]["uniqueViews"] == 1
    assert [v["userId"] for v in body["viewHistory"]] == [seeker[1]["id"]]


def test_view_endpoint(client, employer, seeker, register, create_job):
    job = create_job(employer[0])
    other_token, _ = register("other@mail.com")

    first = client.post(f"/api/jobs/{job['id']}/view", headers=auth(seeker[0])).json()
    assert first == {"message": "View tracked successfully", "views": 1, "uniqueViews": 1}
    client.post(f"/api/jobs/{job['id']}/view", headers=auth(seeker[0]))
    last = client.post(f"/api/jobs/{job['id']}/view", headers=auth(other_token)).json()
    assert last["views"] == 3
    assert last["uniqueViews"] == 2


def test_view_endpoint_requires_token_and_job(client, employer, seeker, create_job):
    job = create_job(employer[0])
    assert client.post(f"/api/jobs/{job['id']}/view").status_code == 401
    assert client.post("/api/jobs/424242/view", headers=auth(seeker[0])).status_code == 404


def test_first_view_insert_is_idempotent(employer, seeker, create_job, db_session):
    job = create_job(employer[0])
    assert _insert_first_view(db_session, job["id"], seeker[1]["id"]) is True
    assert _insert_first_view(db_session, job["id"], seeker[1]["id"]) is False
    db_session.commit()


def test_detail_missing_and_malformed_ids(client):
    assert client.get("/api/jobs/999").status_code == 404
    assert client.get("/api/jobs/not-a-number").status_code == 400


def test_owner_can_patch(client, employer, create_job):
    job = create_job(employer[0])
    res = client.patch(
        f"/api/jobs/{job['id']}",
        json={"salary": "100k", "status": "closed"},
        headers=auth(employer[0]),
    )
    assert res.status_code == 200
    body = res.json()
    assert body["salary"] == "100k"
    assert body["status"] == "closed"
    assert body["title"] == job["title"]


def test_patch_cannot_move_job_or_counters(client, register, employer, create_job, db_session):
    job = create_job(employer[0])
    _, other = register("x@corp.com", role="employer")
    res = client.patch(
        f"/api/jobs/{job['id']}",
        json={"employer": other["id"], "employerId": other["id"], "views": 500},
        headers=auth(employer[0]),
    )
    assert res.status_code == 200
    row = db_session.get(Job, job["id"])
    assert row.employer_id == employer[1]["id"]
    assert row.views == 0


def test_non_owner_cannot_patch_or_delete(client, register, employer, create_job, db_session):
    job = create_job(employer[0])
    intruder, _ = register("intruder@corp.com", role="employer")

    res = client.patch(f"/api/jobs/{job['id']}", json={"title": "Hacked"}, headers=auth(intruder))
    assert res.status_code == 403
    res = client.delete(f"/api/jobs/{job['id']}", headers=auth(intruder))
    assert res.status_code == 403

    row = db_session.get(Job, job["id"])
    assert row is not None
    assert row.title == "Backend Developer"


def test_owner_can_delete(client, employer, seeker, create_job):
    job = create_job(employer[0])
    client.get(f"/api/jobs/{job['id']}", headers=auth(seeker[0]))

    res = client.delete(f"/api/jobs/{job['id']}", headers=auth(employer[0]))
    assert res.status_code == 200
    assert res.json() == {"message": "Job deleted successfully"}
    assert client.get(f"/api/jobs/{job['id']}").status_code == 404


def test_patch_unknown_job(client, employer):
    assert client.patch("/api/jobs/31337", json={"title": "x"}, headers=auth(employer[0])).status_code == 404
