from sqlalchemy import func, select

from app.models.application import Application
from tests.conftest import auth


def test_apply_creates_pending_application(client, employer, seeker, create_job):
    job = create_job(employer[0])
    res = client.post(
        f"/api/jobs/{job['id']}/apply",
        json={"coverLetter": "I would love to join."},
        headers=auth(seeker[0]),
    )
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Application submitted successfully"
    application = body["application"]
    assert application["status"] == "pending"
    assert application["jobId"] == job["id"]
    assert application["applicantId"] == seeker[1]["id"]
    assert application["employerId"] == employer[1]["id"]
    assert application["coverLetter"] == "I would love to join."


def test_apply_without_body(client, employer, seeker, create_job):
    job = create_job(employer[0])
    res = client.post(f"/api/jobs/{job['id']}/apply", headers=auth(seeker[0]))
    assert res.status_code == 201
    assert res.json()["application"]["coverLetter"] is None


def test_second_application_is_conflict(client, employer, seeker, create_job, db_session):
    job = create_job(employer[0])
    first = client.post(f"/api/jobs/{job['id']}/apply", headers=auth(seeker[0]))
    second = client.post(f"/api/jobs/{job['id']}/apply", json={"coverLetter": "again"}, headers=auth(seeker[0]))

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["detail"] == "You have already applied for this job"

    count = db_session.execute(
        select(func.count(Application.id)).where(
            Application.job_id == job["id"], Application.applicant_id == seeker[1]["id"]
        )
    ).scalar_one()
    assert count == 1


def test_apply_to_missing_or_malformed_job(client, seeker):
    assert client.post("/api/jobs/777/apply", headers=auth(seeker[0])).status_code == 404
    assert client.post("/api/jobs/abc/apply", headers=auth(seeker[0])).status_code == 400


def test_employers_cannot_apply(client, register, employer, create_job):
    job = create_job(employer[0])
    other, _ = register("other@corp.com", role="employer")
    assert client.post(f"/api/jobs/{job['id']}/apply", headers=auth(other)).status_code == 403


def test_apply_requires_token(client, employer, create_job):
    job = create_job(employer[0])
    assert client.post(f"/api/jobs/{job['id']}/apply").status_code == 401


def test_applications_survive_job_deletion(client, employer, seeker, create_job):
    job = create_job(employer[0])
    client.post(f"/api/jobs/{job['id']}/apply", headers=auth(seeker[0]))
    assert client.delete(f"/api/jobs/{job['id']}", headers=auth(employer[0])).status_code == 200

    apps = client.get("/api/profile/applications", headers=auth(seeker[0])).json()
    assert len(apps) == 1
    assert apps[0]["job"] == {"id": job["id"], "title": "Untitled job", "company": "Unknown company"}


def test_end_to_end_flow(client, register):
    employer_token, _ = register("hr@corp.com", role="employer", name="HR")
    job = client.post(
        "/api/jobs",
        json={
            "title": "QA Engineer", "company": "Corp", "location": "Remote", "type": "contract",
            "description": "Test things", "requirements": "Patience", "salary": "50k",
            "experience": "entry", "skills": "pytest",
        },
        headers=auth(employer_token),
    ).json()

    seeker_token, seeker_user = register("jo@mail.com", name="Jo")
    detail = client.get(f"/api/jobs/{job['id']}", headers=auth(seeker_token)).json()
    assert detail["views"] == 1 and detail["uniqueViews"] == 1

    applied = client.post(f"/api/jobs/{job['id']}/apply", headers=auth(seeker_token))
    assert applied.status_code == 201

    res = client.get(f"/api/employer/jobs/{job['id']}/applications", headers=auth(employer_token))
    assert res.status_code == 200
    apps = res.json()
    assert len(apps) == 1
    assert apps[0]["status"] == "pending"
    assert apps[0]["applicant"]["id"] == seeker_user["id"]


def test_deleted_job_id_is_not_reused(client, register, employer, seeker, create_job):
    old = create_job(employer[0], title="Old role")
    client.post(f"/api/jobs/{old['id']}/apply", headers=auth(seeker[0]))
    client.delete(f"/api/jobs/{old['id']}", headers=auth(employer[0]))

    other_token, _ = register("next@corp.com", role="employer")
    new = create_job(other_token, title="Brand new")
    assert new["id"] != old["id"]

    apps = client.get(f"/api/employer/jobs/{new['id']}/applications", headers=auth(other_token)).json()
    assert apps == []
    stats = client.get(f"/api/employer/jobs/{new['id']}/stats", headers=auth(other_token)).json()
    assert stats["applications"] == 0

    res = client.post(f"/api/jobs/{new['id']}/apply", headers=auth(seeker[0]))
    assert res.status_code == 201

    mine = client.get("/api/profile/applications", headers=auth(seeker[0])).json()
    by_job = {a["jobId"]: a["job"]["title"] for a in mine}
    assert by_job == {old["id"]: "Untitled job", new["id"]: "Brand new"}
