"""
Test suite for job endpoints.

Tests cover:
- Job creation (admin only)
- Job listing and filtering
- Job retrieval with company
- Partial updates and deletion
"""

import pytest


class TestJobCreation:
    """Tests for POST /jobs"""

    new_job = {
        "title": "new",
        "salary": 40000,
        "equity": "0.089",
        "companyHandle": "c1",
    }

    def test_create_job_as_admin(self, client, admin_headers):
        response = client.post("/api/v1/jobs/", json=self.new_job, headers=admin_headers)

        assert response.status_code == 201
        job = response.json()["job"]
        assert isinstance(job["id"], int)
        assert {k: v for k, v in job.items() if k != "id"} == self.new_job

    def test_create_job_non_admin(self, client, u1_headers):
        response = client.post("/api/v1/jobs/", json=self.new_job, headers=u1_headers)
        assert response.status_code == 401

    def test_create_job_anon(self, client, users):
        response = client.post("/api/v1/jobs/", json=self.new_job)
        assert response.status_code == 401

    def test_create_job_missing_company(self, client, admin_headers):
        response = client.post("/api/v1/jobs/", json={"title": "new"}, headers=admin_headers)
        assert response.status_code == 422  # Validation error

    def test_create_job_salary_as_string(self, client, admin_headers):
        response = client.post(
            "/api/v1/jobs/",
            json={**self.new_job, "salary": "40000"},
            headers=admin_headers,
        )
        assert response.status_code == 422

    @pytest.mark.parametrize("equity", ["1.5", "-0.1", "abc"])
    def test_create_job_bad_equity(self, client, admin_headers, equity):
        response = client.post(
            "/api/v1/jobs/",
            json={**self.new_job, "equity": equity},
            headers=admin_headers,
        )
        assert response.status_code == 422

    def test_create_job_unknown_company(self, client, admin_headers):
        response = client.post(
            "/api/v1/jobs/",
            json={**self.new_job, "companyHandle": "nope"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert "nope" in response.json()["detail"]

        # The session is still usable after the rollback
        assert client.get("/api/v1/jobs/").status_code == 200


class TestJobListing:
    """Tests for GET /jobs"""

    def test_list_jobs_anon(self, client, seeded_db):
        response = client.get("/api/v1/jobs/")

        assert response.status_code == 200
        jobs = response.json()["jobs"]
        assert [job["title"] for job in jobs] == ["J1", "J2", "J3"]
        assert jobs[0]["equity"] == "0.01"
        assert jobs[0]["companyHandle"] == "c1"

    def test_list_jobs_with_filters(self, client, seeded_db):
        response = client.get(
            "/api/v1/jobs/", params={"title": "j", "minSalary": 100, "hasEquity": "true"}
        )

        assert response.status_code == 200
        assert [job["title"] for job in response.json()["jobs"]] == ["J1", "J2"]

    def test_list_jobs_min_salary(self, client, seeded_db):
        response = client.get("/api/v1/jobs/", params={"minSalary": 150})
        assert [job["title"] for job in response.json()["jobs"]] == ["J2"]

    def test_list_jobs_has_equity_false(self, client, seeded_db):
        response = client.get("/api/v1/jobs/", params={"hasEquity": "false"})
        assert [job["title"] for job in response.json()["jobs"]] == ["J1", "J2", "J3"]

    def test_list_jobs_negative_min_salary(self, client, seeded_db):
        response = client.get("/api/v1/jobs/", params={"minSalary": -10})

        assert response.status_code == 400
        assert "min salary" in response.json()["detail"].lower()

    def test_list_jobs_bad_filter_value(self, client, seeded_db):
        response = client.get("/api/v1/jobs/", params={"minSalary": "lots"})
        assert response.status_code == 422

    def test_list_jobs_unknown_filter(self, client, seeded_db):
        response = client.get("/api/v1/jobs/", params={"color": "blue"})
        assert response.status_code == 422

    def test_list_jobs_snake_case_filter(self, client, seeded_db):
        response = client.get("/api/v1/jobs/", params={"min_salary": 5})
        assert response.status_code == 422


class TestJobRetrieval:
    """Tests for GET /jobs/{id}"""

    def test_get_job(self, client, job_ids):
        response = client.get(f"/api/v1/jobs/{job_ids['J1']}")

        assert response.status_code == 200
        assert response.json() == {
            "job": {
                "id": job_ids["J1"],
                "title": "J1",
                "salary": 100,
                "equity": "0.01",
                "company": {
                    "handle": "c1",
                    "name": "C1",
                    "description": "Desc1",
                    "numEmployees": 1,
                    "logoUrl": "http://c1.img",
                },
            }
        }

    def test_get_nonexistent_job(self, client, seeded_db):
        response = client.get("/api/v1/jobs/99999")

        assert response.status_code == 404
        assert "no job" in response.json()["detail"].lower()


class TestJobUpdate:
    """Tests for PATCH /jobs/{id}"""

    def test_update_as_admin(self, client, job_ids, admin_headers):
        response = client.patch(
            f"/api/v1/jobs/{job_ids['J1']}", json={"title": "J1-new"}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json() == {
            "job": {
                "id": job_ids["J1"],
                "title": "J1-new",
                "salary": 100,
                "equity": "0.01",
                "companyHandle": "c1",
            }
        }

    def test_update_clears_salary(self, client, job_ids, admin_headers):
        response = client.patch(
            f"/api/v1/jobs/{job_ids['J1']}", json={"salary": None}, headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["job"]["salary"] is None

    def test_update_non_admin(self, client, job_ids, u1_headers):
        response = client.patch(
            f"/api/v1/jobs/{job_ids['J1']}", json={"title": "J1-new"}, headers=u1_headers
        )
        assert response.status_code == 401

    def test_update_anon(self, client, job_ids):
        response = client.patch(f"/api/v1/jobs/{job_ids['J1']}", json={"title": "J1-new"})
        assert response.status_code == 401

    def test_update_nonexistent_job(self, client, admin_headers):
        response = client.patch("/api/v1/jobs/0", json={"title": "new"}, headers=admin_headers)
        assert response.status_code == 404

    def test_update_company_handle(self, client, job_ids, admin_headers):
        response = client.patch(
            f"/api/v1/jobs/{job_ids['J1']}", json={"companyHandle": "c2"}, headers=admin_headers
        )
        assert response.status_code == 422

    def test_update_invalid_data(self, client, job_ids, admin_headers):
        response = client.patch(
            f"/api/v1/jobs/{job_ids['J1']}", json={"salary": "not-a-number"}, headers=admin_headers
        )
        assert response.status_code == 422

    def test_update_empty_body(self, client, job_ids, admin_headers):
        response = client.patch(f"/api/v1/jobs/{job_ids['J1']}", json={}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "No data"


class TestJobDeletion:
    """Tests for DELETE /jobs/{id}"""

    def test_delete_as_admin(self, client, job_ids, admin_headers):
        response = client.delete(f"/api/v1/jobs/{job_ids['J1']}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": job_ids["J1"]}

        get_response = client.get(f"/api/v1/jobs/{job_ids['J1']}")
        assert get_response.status_code == 404

    def test_delete_non_admin(self, client, job_ids, u1_headers):
        response = client.delete(f"/api/v1/jobs/{job_ids['J1']}", headers=u1_headers)
        assert response.status_code == 401

    def test_delete_anon(self, client, job_ids):
        response = client.delete(f"/api/v1/jobs/{job_ids['J1']}")
        assert response.status_code == 401

    def test_delete_nonexistent_job(self, client, admin_headers):
        response = client.delete("/api/v1/jobs/99999", headers=admin_headers)
        assert response.status_code == 404
