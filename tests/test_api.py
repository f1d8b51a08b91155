"""End-to-end API tests: accounts, records, documents, dashboard and chat."""

import pytest

from conftest import signup

RESUME = """Jane Doe
Title: Senior Engineer
Education: BS Civil Engineering
She has 12 years of experience designing Python traffic models for cities.
"""

COMPANY_DOC = "Company: Acme Corp\nLocation: Denver, CO\nA certified DBE offering Surveying services."

PROJECT_DOC = "Project: Bridge Rehab\nClient: CDOT\nValue: $450,000\nOutcome: Delivered on time"


def upload_and_ingest(client, headers, file_name, content):
    uploaded = client.post(
        "/api/upload-file",
        json={"fileName": file_name, "fileContent": content, "fileType": "text/plain"},
        headers=headers,
    )
    assert uploaded.status_code == 200, uploaded.text
    path = uploaded.json()["filePath"]
    return client.post(
        "/api/ingest",
        json={"filePath": path, "fileName": file_name, "fileType": "text/plain"},
        headers=headers,
    )


# =========================================================================
# ACCOUNTS
# =========================================================================
class TestAccounts:

    def test_signup_creates_admin_and_organization(self, client):
        response = client.post(
            "/api/signup",
            json={"email": "Lead@NorthRidge.com", "password": "long-enough-pw", "orgName": "North Ridge"},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["user"]["email"] == "lead@northridge.com"
        assert body["user"]["role"] == "admin"
        assert body["user"]["org_id"] == body["organization"]["id"]
        assert body["organization"]["name"] == "North Ridge"
        assert body["token_type"] == "bearer"

    def test_duplicate_signup_rejected(self, client, acme):
        response = client.post(
            "/api/signup",
            json={"email": "owner@acmecorp.com", "password": "another-password", "orgName": "Acme Two"},
        )
        assert response.status_code == 400
        assert response.json()["type"] == "duplicate_account"

    def test_short_password_rejected(self, client):
        response = client.post(
            "/api/signup",
            json={"email": "a@shortpw.com", "password": "short", "orgName": "Short"},
        )
        assert response.status_code == 422

    def test_second_organization_starts_empty(self, client, acme):
        headers, _ = signup(client, "lead@thirdfirm.com", "Third Firm")
        assert client.get("/api/dashboard", headers=headers).json()["totals"]["companies"] == 0

    def test_login(self, client, acme):
        response = client.post(
            "/api/login",
            json={"email": "owner@acmecorp.com", "password": "correct-horse-battery"},
        )
        assert response.status_code == 200
        token = response.json()["access_token"]
        listed = client.get("/api/records/companies", headers={"Authorization": f"Bearer {token}"})
        assert listed.status_code == 200

    def test_login_wrong_password(self, client, acme):
        response = client.post(
            "/api/login",
            json={"email": "owner@acmecorp.com", "password": "wrong-password"},
        )
        assert response.status_code == 401
        assert response.json()["type"] == "authentication_error"

    def test_login_unknown_email_same_error(self, client):
        response = client.post(
            "/api/login",
            json={"email": "nobody@acmecorp.com", "password": "whatever-password"},
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid credentials"

    @pytest.mark.parametrize("path", [
        "/api/records/companies",
        "/api/records/people",
        "/api/records/projects",
        "/api/dashboard",
    ])
    def test_requires_token(self, client, path):
        assert client.get(path).status_code == 401

    def test_garbage_token(self, client):
        response = client.get("/api/dashboard", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401


# =========================================================================
# RECORDS
# =========================================================================
class TestRecords:

    def test_manual_create_is_draft(self, client, acme):
        headers, org_id = acme
        response = client.post("/api/records/companies", json={"name": "Acme Corp"}, headers=headers)
        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "Draft"
        assert body["org_id"] == org_id

    def test_search_and_status_filter(self, client, acme):
        headers, _ = acme
        client.post("/api/records/companies", json={"name": "Acme Corp"}, headers=headers)
        client.post("/api/records/companies",
                    json={"name": "Other Co", "status": "Client Verified"}, headers=headers)

        searched = client.get("/api/records/companies", params={"search": "acme"}, headers=headers)
        assert [r["name"] for r in searched.json()["records"]] == ["Acme Corp"]

        verified = client.get("/api/records/companies",
                              params={"status": "Client Verified"}, headers=headers)
        assert verified.json()["total"] == 1
        assert verified.json()["records"][0]["name"] == "Other Co"

        everything = client.get("/api/records/companies", params={"status": "all"}, headers=headers)
        assert everything.json()["total"] == 2

    def test_unknown_status_filter_rejected(self, client, acme):
        headers, _ = acme
        response = client.get("/api/records/companies", params={"status": "Approved"}, headers=headers)
        assert response.status_code == 422

    def test_put_overwrites_whole_row(self, client, acme):
        headers, _ = acme
        created = client.post("/api/records/people", json={
            "name": "Jane Doe",
            "title": "Senior Engineer",
            "years": 12,
            "status": "Purely Verified",
        }, headers=headers).json()

        response = client.put(f"/api/records/people/{created['id']}",
                              json={"name": "Jane Smith"}, headers=headers)
        assert response.status_code == 200
        body = response.json()
        assert body["name"] == "Jane Smith"
        assert body["title"] is None
        assert body["years"] is None
        assert body["status"] == "Draft"

    def test_delete(self, client, acme):
        headers, _ = acme
        created = client.post("/api/records/projects", json={"name": "Bridge"}, headers=headers).json()
        response = client.delete(f"/api/records/projects/{created['id']}", headers=headers)
        assert response.status_code == 204
        assert client.get("/api/records/projects", headers=headers).json()["total"] == 0
        missing = client.get(f"/api/records/projects/{created['id']}", headers=headers)
        assert missing.status_code == 404

    def test_missing_record(self, client, acme):
        headers, _ = acme
        response = client.get("/api/records/companies/does-not-exist", headers=headers)
        assert response.status_code == 404
        assert response.json()["type"] == "not_found"

    @pytest.mark.parametrize("collection, payload", [
        ("people", {"name": "Jane", "years": 10**20}),
        ("people", {"name": "Jane", "years": -1}),
        ("projects", {"name": "Big", "value": 10**20}),
        ("projects", {"name": "Big", "start_date": "x" * 40}),
    ])
    def test_values_the_columns_cannot_hold_are_rejected(self, client, acme, collection, payload):
        headers, _ = acme
        created = client.post(f"/api/records/{collection}", json=payload, headers=headers)
        assert created.status_code == 422

        record = client.post(f"/api/records/{collection}", json={"name": "Ok"}, headers=headers).json()
        replaced = client.put(f"/api/records/{collection}/{record['id']}", json=payload, headers=headers)
        assert replaced.status_code == 422


class TestTenantIsolation:

    def test_foreign_record_is_not_found(self, client, acme, rival):
        acme_headers, _ = acme
        rival_headers, _ = rival
        created = client.post("/api/records/companies",
                              json={"name": "Acme Corp"}, headers=acme_headers).json()
        url = f"/api/records/companies/{created['id']}"

        assert client.get(url, headers=rival_headers).status_code == 404
        assert client.put(url, json={"name": "Hijacked"}, headers=rival_headers).status_code == 404
        assert client.delete(url, headers=rival_headers).status_code == 404

        # Unchanged for the owner
        assert client.get(url, headers=acme_headers).json()["name"] == "Acme Corp"

    def test_foreign_and_missing_look_the_same(self, client, acme, rival):
        acme_headers, _ = acme
        rival_headers, _ = rival
        created = client.post("/api/records/people", json={"name": "Jane"}, headers=acme_headers).json()
        foreign = client.get(f"/api/records/people/{created['id']}", headers=rival_headers)
        assert foreign.json()["type"] == "not_found"
        assert "Jane" not in foreign.text

    def test_lists_are_separate(self, client, acme, rival):
        acme_headers, acme_org = acme
        rival_headers, _ = rival
        client.post("/api/records/projects", json={"name": "Acme Bridge"}, headers=acme_headers)
        client.post("/api/records/projects", json={"name": "Rival Tunnel"}, headers=rival_headers)

        listed = client.get("/api/records/projects", headers=acme_headers).json()
        assert [r["name"] for r in listed["records"]] == ["Acme Bridge"]
        assert all(r["org_id"] == acme_org for r in listed["records"])

    def test_person_cannot_link_foreign_company(self, client, acme, rival):
        acme_headers, _ = acme
        rival_headers, _ = rival
        foreign = client.post("/api/records/companies",
                              json={"name": "Rival Co"}, headers=rival_headers).json()
        response = client.post("/api/records/people",
                               json={"name": "Jane", "company_id": foreign["id"]}, headers=acme_headers)
        assert response.status_code == 404

    def test_dashboard_counts_only_own_records(self, client, acme, rival):
        acme_headers, _ = acme
        rival_headers, _ = rival
        client.post("/api/records/companies", json={"name": "Rival Co"}, headers=rival_headers)
        stats = client.get("/api/dashboard", headers=acme_headers).json()
        assert stats["totals"] == {"companies": 0, "people": 0, "projects": 0}


# =========================================================================
# DOCUMENTS
# =========================================================================
class TestDocuments:

    def test_ingest_resume_creates_ai_generated_person(self, client, acme):
        headers, org_id = acme
        response = upload_and_ingest(client, headers, "jane.txt", RESUME)
        assert response.status_code == 200, response.text
        body = response.json()
        assert body["success"] is True
        assert body["collection"] == "people"
        assert body["result"]["name"] == "Jane Doe"
        assert body["result"]["title"] == "Senior Engineer"
        assert body["result"]["status"] == "AI-Generated"
        assert body["result"]["org_id"] == org_id

        people = client.get("/api/records/people", headers=headers).json()
        assert people["total"] == 1

    def test_ingest_infers_company_and_project(self, client, acme):
        headers, _ = acme
        company = upload_and_ingest(client, headers, "acme.txt", COMPANY_DOC).json()
        project = upload_and_ingest(client, headers, "bridge.txt", PROJECT_DOC).json()
        assert company["collection"] == "companies"
        assert company["result"]["dbe"] is True
        assert project["collection"] == "projects"
        assert project["result"]["value"] == 450000

    def test_upload_path_is_under_org_prefix(self, client, acme):
        headers, org_id = acme
        response = client.post(
            "/api/upload-file",
            json={"fileName": "notes.txt", "fileContent": "hello"},
            headers=headers,
        )
        assert response.json()["filePath"].startswith(f"{org_id}/")

    def test_cannot_ingest_other_org_file(self, client, acme, rival):
        acme_headers, _ = acme
        rival_headers, _ = rival
        uploaded = client.post(
            "/api/upload-file",
            json={"fileName": "jane.txt", "fileContent": RESUME},
            headers=acme_headers,
        ).json()
        response = client.post(
            "/api/ingest",
            json={"filePath": uploaded["filePath"], "fileName": "jane.txt"},
            headers=rival_headers,
        )
        assert response.status_code == 404
        assert client.get("/api/records/people", headers=rival_headers).json()["total"] == 0

    def test_ingest_missing_file(self, client, acme):
        headers, org_id = acme
        response = client.post(
            "/api/ingest",
            json={"filePath": f"{org_id}/0-missing.txt", "fileName": "missing.txt"},
            headers=headers,
        )
        assert response.status_code == 404

    def test_ingest_amount_too_large_for_column(self, client, acme):
        headers, _ = acme
        response = upload_and_ingest(
            client, headers, "big.txt", "Project: Big\nClient: X\nValue: $99,999,999,999,999,999,999"
        )
        assert response.status_code == 200, response.text
        body = response.json()
        assert body["collection"] == "projects"
        assert body["result"]["name"] == "Big"
        assert body["result"]["value"] is None
        assert body["result"]["status"] == "AI-Generated"

    def test_ingest_path_with_nul_byte(self, client, acme):
        headers, org_id = acme
        response = client.post(
            "/api/ingest",
            json={"filePath": f"{org_id}/a\x00b.txt", "fileName": "a.txt"},
            headers=headers,
        )
        assert response.status_code == 400
        assert response.json()["type"] == "validation_error"

    def test_ingest_file_without_extension_or_type(self, client, acme):
        headers, _ = acme
        uploaded = client.post(
            "/api/upload-file",
            json={"fileName": "notes", "fileContent": PROJECT_DOC, "fileType": "text/plain"},
            headers=headers,
        ).json()
        response = client.post(
            "/api/ingest",
            json={"filePath": uploaded["filePath"], "fileName": "notes"},
            headers=headers,
        )
        assert response.status_code == 200
        assert response.json()["collection"] == "projects"


# =========================================================================
# DASHBOARD
# =========================================================================
class TestDashboard:

    def test_status_totals_sum_across_collections(self, client, acme):
        headers, _ = acme
        client.post("/api/records/companies", json={"name": "Manual Co"}, headers=headers)
        upload_and_ingest(client, headers, "jane.txt", RESUME)
        upload_and_ingest(client, headers, "acme.txt", COMPANY_DOC)
        upload_and_ingest(client, headers, "bridge.txt", PROJECT_DOC)

        stats = client.get("/api/dashboard", headers=headers).json()
        assert stats["totals"] == {"companies": 2, "people": 1, "projects": 1}
        assert stats["by_status"] == {
            "Draft": 1,
            "AI-Generated": 3,
            "Purely Verified": 0,
            "Client Verified": 0,
        }


# =========================================================================
# CHAT
# =========================================================================
class TestChatEndpoint:

    def test_canned_reply(self, client, acme):
        headers, _ = acme
        response = client.post("/api/chat", json={"message": "What can you do?"}, headers=headers)
        assert response.status_code == 200
        assert response.json()["response"].startswith("I'm your AI assistant")

    def test_client_context_is_used(self, client, acme):
        headers, _ = acme
        response = client.post("/api/chat", json={
            "message": "Which companies do we have?",
            "context": 'Companies in your database:\n[{"name": "Acme Corp"}]\n\n',
        }, headers=headers)
        assert "Acme Corp" in response.json()["response"]

    def test_server_context_ignores_body_org_id(self, client, acme, rival):
        acme_headers, _ = acme
        rival_headers, rival_org = rival
        client.post("/api/records/companies", json={"name": "Acme Corp"}, headers=acme_headers)
        client.post("/api/records/companies", json={"name": "Rival Co"}, headers=rival_headers)

        response = client.post("/api/chat", json={
            "message": "list our companies",
            "orgId": rival_org,
            "includeRecords": True,
        }, headers=acme_headers)
        reply = response.json()["response"]
        assert "Acme Corp" in reply
        assert "Rival Co" not in reply

    def test_requires_token(self, client):
        assert client.post("/api/chat", json={"message": "help"}).status_code == 401

    def test_empty_message_rejected(self, client, acme):
        headers, _ = acme
        assert client.post("/api/chat", json={"message": ""}, headers=headers).status_code == 422


class TestHealth:

    def test_health(self, client):
        body = client.get("/health").json()
        assert body["status"] == "healthy"
        assert body["database"] == "ok"
