import pytest

from workin.errors import InvalidIdentifier, parse_identifier


def _job_payload(**overrides):
    payload = {
        "title": "  Platform Engineer ",
        "company": "Acme Labs",
        "location": "Pune",
        "description": "Own the deployment pipeline",
        "requirements": "Python, Terraform",
        "salary": " 12-18 LPA ",
    }
    payload.update(overrides)
    return payload


def test_create_job_trims_input_and_defaults_type(client, hr_user, auth_headers):
    response = client.post(f"/api/jobs/hr/{hr_user.id}", json=_job_payload(), headers=auth_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Job created successfully"
    assert body["job"]["title"] == "Platform Engineer"
    assert body["job"]["salary"] == "12-18 LPA"
    assert body["job"]["type"] == "full-time"
    assert body["job"]["hr_id"] == hr_user.id


def test_create_job_validation(client, hr_user, auth_headers):
    response = client.post(f"/api/jobs/hr/{hr_user.id}", json=_job_payload(requirements="  "), headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"message": "All required fields must be filled"}

    response = client.post("/api/jobs/hr/zero", json=_job_payload(), headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid HR ID"}

    response = client.post("/api/jobs/hr/999", json=_job_payload(), headers=auth_headers)
    assert response.status_code == 404


def test_create_job_requires_authentication(client, hr_user):
    response = client.post(f"/api/jobs/hr/{hr_user.id}", json=_job_payload())
    assert response.status_code == 401
    assert response.json() == {"message": "Authentication required"}


def test_list_jobs_defaults(client, hr_user, make_job):
    for index in range(12):
        make_job(hr_user, title=f"Role {index:02d}")

    response = client.get("/api/jobs")
    assert response.status_code == 200
    body = response.json()
    assert len(body["jobs"]) == 10
    assert body["pagination"] == {"page": 1, "limit": 10, "total": 12, "pages": 2}
    assert body["filters"]["sortBy"] == "createdAt"
    assert body["filters"]["sortOrder"] == "desc"
    assert body["jobs"][0]["hr"]["name"] == "Meera Hr"


def test_list_jobs_filters_sort_and_pages(client, hr_user, make_job):
    make_job(hr_user, title="Python Engineer", location="Pune", requirements="Python")
    make_job(hr_user, title="Go Engineer", location="Pune", requirements="Go")
    make_job(hr_user, title="Python Analyst", location="Delhi", requirements="Python, SQL")

    response = client.get("/api/jobs", params={"skills": "python", "sortBy": "title", "sortOrder": "asc"})
    body = response.json()
    assert [job["title"] for job in body["jobs"]] == ["Python Analyst", "Python Engineer"]
    assert body["filters"]["skills"] == "python"

    response = client.get("/api/jobs", params={"location": "pune", "sortBy": "title", "sortOrder": "asc", "limit": "1", "page": "2"})
    body = response.json()
    assert [job["title"] for job in body["jobs"]] == ["Python Engineer"]
    assert body["pagination"] == {"page": 2, "limit": 1, "total": 2, "pages": 2}


def test_list_jobs_with_unknown_sort_field_falls_back(client, hr_user, make_job):
    make_job(hr_user)
    response = client.get("/api/jobs", params={"sortBy": "salary; drop table jobs", "sortOrder": "sideways"})
    assert response.status_code == 200
    assert response.json()["filters"]["sortBy"] == "createdAt"
    assert response.json()["filters"]["sortOrder"] == "desc"


def test_search_without_matches_is_an_empty_page(client, hr_user, make_job):
    make_job(hr_user, title="Accountant", description="Ledgers", requirements="Excel")

    response = client.get("/api/jobs", params={"search": "engineer"})
    assert response.status_code == 200
    body = response.json()
    assert body["jobs"] == []
    assert body["pagination"]["total"] == 0
    assert body["pagination"]["pages"] == 0


def test_list_jobs_rejects_bad_pagination(client):
    response = client.get("/api/jobs", params={"page": "0"})
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid page number"}

    response = client.get("/api/jobs", params={"limit": "500"})
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid limit (1-100)"}


def test_list_jobs_by_hr(client, hr_user, make_user, make_job):
    other_hr = make_user(name="Omar Hr", role="hr")
    make_job(hr_user, title="Mine A")
    make_job(hr_user, title="Mine B")
    make_job(other_hr, title="Theirs")

    response = client.get(f"/api/jobs/hr/{hr_user.id}", params={"sortBy": "title", "sortOrder": "asc"})
    assert response.status_code == 200
    body = response.json()
    assert [job["title"] for job in body["jobs"]] == ["Mine A", "Mine B"]
    assert body["pagination"]["total"] == 2

    assert client.get("/api/jobs/hr/-4").status_code == 400


def test_get_job(client, hr_user, make_job):
    job = make_job(hr_user)

    response = client.get(f"/api/jobs/{job.id}")
    assert response.status_code == 200
    assert response.json()["hr"] == {"name": "Meera Hr", "email": "meera@acme.example"}

    assert client.get("/api/jobs/424242").json() == {"message": "Job not found"}
    response = client.get("/api/jobs/1.5")
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid job ID"}


def test_update_job(client, hr_user, make_job, auth_headers):
    job = make_job(hr_user)

    response = client.put(f"/api/jobs/{job.id}", json={"title": "Staff Engineer", "salary": ""}, headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["job"]["title"] == "Staff Engineer"
    assert body["job"]["company"] == "Acme Labs"
    assert body["job"]["salary"] is None

    response = client.put(f"/api/jobs/{job.id}", json={"company": "   "}, headers=auth_headers)
    assert response.status_code == 400

    assert client.put("/api/jobs/999", json={"title": "X"}, headers=auth_headers).status_code == 404


def test_delete_job_removes_its_applications(client, db_session, hr_user, candidate, make_job, make_application, auth_headers):
    job = make_job(hr_user)
    job_id = job.id
    make_application(job, candidate)

    response = client.delete(f"/api/jobs/{job_id}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Job deleted successfully"}
    assert client.get(f"/api/jobs/{job_id}").status_code == 404

    listed = client.get(f"/api/applications/candidate/{candidate.id}", headers=auth_headers).json()
    assert listed["applications"] == []

    assert client.delete(f"/api/jobs/{job_id}", headers=auth_headers).status_code == 404


def test_unknown_route_and_health(client):
    assert client.get("/health").json() == {"status": "ok"}
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"message": "Route not found"}


@pytest.mark.parametrize("raw", ["1_0", "١", "١٠", " 1_0 ", "0x0a"])
def test_identifiers_must_be_plain_ascii_digits(raw):
    with pytest.raises(InvalidIdentifier) as exc_info:
        parse_identifier(raw, "job")
    assert exc_info.value.message == "Invalid job ID"


def test_delete_with_underscored_id_does_not_touch_job_ten(client, hr_user, make_job, auth_headers):
    jobs = [make_job(hr_user, title=f"Role {n}") for n in range(1, 11)]
    assert jobs[-1].id == 10

    response = client.delete("/api/jobs/1_0", headers=auth_headers)
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid job ID"}
    assert client.delete("/api/jobs/١", headers=auth_headers).status_code == 400

    assert client.get("/api/jobs/10").json()["title"] == "Role 10"
