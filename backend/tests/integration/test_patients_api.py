"""End-to-end tests for patient registration and the paginated listings."""

from datetime import timedelta

import pytest
import pytest_asyncio

PATIENTS = [
    {"name": "Ann Lee", "email": "ann@clinic.io", "password": "secret123", "contact_number": "555-0101"},
    {"name": "Bob Stone", "email": "bob@clinic.io", "password": "secret123", "address": "Annex Road 4"},
    {"name": "Cara Diaz", "email": "cara@clinic.io", "password": "secret123"},
]


@pytest_asyncio.fixture
async def admin(client, seed_user, make_token):
    await seed_user("admin@clinic.io", "ADMIN")
    client.cookies.set("accessToken", make_token("admin@clinic.io", "ADMIN"))
    return client


async def register_patients(client):
    for patient in PATIENTS:
        response = await client.post("/api/v1/users/create-patient", json=patient)
        assert response.status_code == 201


# ── Registration ────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_create_patient(client):
    response = await client.post("/api/v1/users/create-patient", json=PATIENTS[0])

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "Patient created successfully"
    assert body["data"]["email"] == "ann@clinic.io"
    assert body["data"]["contact_number"] == "555-0101"
    assert "password" not in body["data"]


@pytest.mark.asyncio
async def test_create_patient_twice_conflicts(client):
    await client.post("/api/v1/users/create-patient", json=PATIENTS[0])
    response = await client.post("/api/v1/users/create-patient", json=PATIENTS[0])

    assert response.status_code == 409
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_create_patient_validation_error(client):
    response = await client.post(
        "/api/v1/users/create-patient", json={"name": "No Password", "email": "np@clinic.io"}
    )

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["error"]["type"] == "ValidationError"


# ── Authentication ──────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_listing_requires_a_token(client):
    response = await client.get("/api/v1/patients")

    assert response.status_code == 401
    assert response.json()["message"] == "Access token is required"


@pytest.mark.asyncio
async def test_listing_rejects_patients(client, make_token):
    await register_patients(client)
    client.cookies.set("accessToken", make_token("ann@clinic.io", "PATIENT"))

    response = await client.get("/api/v1/patients")

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_doctors_may_list_patients_but_not_users(client, seed_user, make_token):
    await seed_user("doc@clinic.io", "DOCTOR")
    client.cookies.set("accessToken", make_token("doc@clinic.io", "DOCTOR"))

    assert (await client.get("/api/v1/patients")).status_code == 200
    assert (await client.get("/api/v1/users")).status_code == 403


@pytest.mark.asyncio
async def test_expired_token_is_rejected(client, seed_user, make_token):
    await seed_user("admin@clinic.io", "ADMIN")
    client.cookies.set(
        "accessToken", make_token("admin@clinic.io", "ADMIN", expires_in=timedelta(minutes=-5))
    )

    response = await client.get("/api/v1/patients")

    assert response.status_code == 401
    assert "expired" in response.json()["message"]


@pytest.mark.asyncio
async def test_blocked_account_is_rejected(client, seed_user, make_token):
    await seed_user("old@clinic.io", "ADMIN", status="INACTIVE")
    client.cookies.set("accessToken", make_token("old@clinic.io", "ADMIN"))

    response = await client.get("/api/v1/patients")

    assert response.status_code == 400
    assert response.json()["message"] == "User is INACTIVE"


# ── Listing ─────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_list_patients_default_page(admin):
    await register_patients(admin)

    response = await admin.get("/api/v1/patients")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Patients retrieved successfully"
    assert body["meta"] == {"page": 1, "limit": 10, "total": 3, "total_pages": 1}
    assert len(body["data"]) == 3


@pytest.mark.asyncio
async def test_search_matches_any_searchable_field(admin):
    await register_patients(admin)

    response = await admin.get("/api/v1/patients", params={"searchTerm": "ANN", "sort": "name"})

    names = [row["name"] for row in response.json()["data"]]
    # "Ann Lee" by name, "Bob Stone" by address
    assert names == ["Ann Lee", "Bob Stone"]


@pytest.mark.asyncio
async def test_pagination_and_sort(admin):
    await register_patients(admin)

    response = await admin.get(
        "/api/v1/patients", params={"page": "2", "limit": "2", "sort": "-name"}
    )

    body = response.json()
    assert body["meta"] == {"page": 2, "limit": 2, "total": 3, "total_pages": 2}
    assert [row["name"] for row in body["data"]] == ["Ann Lee"]


@pytest.mark.asyncio
async def test_filter_by_allowlisted_field(admin):
    await register_patients(admin)

    response = await admin.get(
        "/api/v1/patients", params={"contactNumber": "555-0101", "isDeleted": "false"}
    )

    body = response.json()
    assert body["meta"]["total"] == 1
    assert body["data"][0]["email"] == "ann@clinic.io"


@pytest.mark.asyncio
async def test_operator_filter_from_brackets(admin):
    await register_patients(admin)

    response = await admin.get(
        "/api/v1/patients", params={"email[in]": "ann@clinic.io,cara@clinic.io", "sort": "email"}
    )

    assert [row["email"] for row in response.json()["data"]] == [
        "ann@clinic.io",
        "cara@clinic.io",
    ]


@pytest.mark.asyncio
async def test_recent_rows_only(admin):
    await register_patients(admin)

    response = await admin.get("/api/v1/patients", params={"days": "1"})

    assert response.json()["meta"]["total"] == 3


@pytest.mark.asyncio
async def test_fields_projection(admin):
    await register_patients(admin)

    response = await admin.get("/api/v1/patients", params={"fields": "name,email"})

    for row in response.json()["data"]:
        assert set(row) == {"name", "email"}


@pytest.mark.asyncio
async def test_populate_includes_user_without_password(admin):
    await register_patients(admin)

    response = await admin.get(
        "/api/v1/patients", params={"populate": "user", "fields": "name"}
    )

    body = response.json()
    assert len(body["warnings"]) == 1
    row = body["data"][0]
    assert "contact_number" in row
    assert row["user"]["role"] == "PATIENT"
    assert "password" not in row["user"]


@pytest.mark.asyncio
async def test_unknown_sort_field_is_bad_request(admin):
    response = await admin.get("/api/v1/patients", params={"sort": "nickname"})

    assert response.status_code == 400
    assert response.json()["success"] is False


@pytest.mark.asyncio
async def test_list_users_never_returns_passwords(admin):
    await register_patients(admin)

    response = await admin.get("/api/v1/users", params={"role": "PATIENT"})

    body = response.json()
    assert body["message"] == "Users retrieved successfully"
    assert body["meta"]["total"] == 3
    for row in body["data"]:
        assert "password" not in row
        assert row["role"] == "PATIENT"


@pytest.mark.asyncio
async def test_password_cannot_be_selected(admin):
    response = await admin.get("/api/v1/users", params={"fields": "email,password"})

    assert response.status_code == 400
