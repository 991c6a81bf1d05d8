from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError

from medlink.core.security import create_access_token, get_password_hash
from medlink.models.organization import JobPosting, Organization
from medlink.repositories.application_repo import ApplicationRepository
from medlink.repositories.organization_repo import OrganizationRepository
from medlink.models.user import User
from conftest import auth_header, register_user

JOB_PAYLOAD = {
    "title": "Cardiologist",
    "description": "Outpatient cardiology",
    "requirements": "Board certified",
    "salary": "$300k",
    "location": "Boston, MA",
    "jobType": "Full-time",
    "specialty": "Cardiology",
}


async def _create_org(client, owner, name="Acme Clinic"):
    response = await client.post(
        "/organizations",
        json={"name": name, "type": "Clinic", "website": "https://acme.example.com"},
        headers=auth_header(owner["token"]),
    )
    assert response.status_code == 201, response.text
    return response.json()["organization"]


async def _create_job(client, owner, org_id, **overrides):
    payload = dict(JOB_PAYLOAD, organizationId=org_id)
    payload.update(overrides)
    response = await client.post("/jobs", json=payload, headers=auth_header(owner["token"]))
    assert response.status_code == 201, response.text
    return response.json()["jobPosting"]


@pytest.mark.asyncio
async def test_create_organization_makes_creator_admin(client):
    owner = await register_user(client, "owner@example.com")
    org = await _create_org(client, owner)
    assert org["name"] == "Acme Clinic"
    assert org["website"] == "https://acme.example.com"

    memberships = (await client.get("/organizations/mine", headers=auth_header(owner["token"]))).json()["memberships"]
    assert len(memberships) == 1
    assert memberships[0]["role"] == "admin"
    assert memberships[0]["organization"]["id"] == org["id"]


@pytest.mark.asyncio
async def test_create_organization_duplicate_name(client):
    owner = await register_user(client, "dupowner@example.com")
    await _create_org(client, owner, "Mercy")
    response = await client.post(
        "/organizations", json={"name": "Mercy", "type": "Hospital"}, headers=auth_header(owner["token"])
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_create_organization_requires_profile(client, db_session):
    user = User(email="plain@example.com", password_hash=get_password_hash("x"), first_name="P", last_name="L")
    db_session.add(user)
    await db_session.commit()
    token = create_access_token({"user_id": user.id})

    response = await client.post(
        "/organizations", json={"name": "Nope", "type": "Clinic"}, headers=auth_header(token)
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_organization_rejects_bad_website(client):
    owner = await register_user(client, "web@example.com")
    response = await client.post(
        "/organizations",
        json={"name": "Bad Web", "type": "Clinic", "website": "not a url"},
        headers=auth_header(owner["token"]),
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_only_admin_can_post_jobs(client):
    owner = await register_user(client, "admin@example.com")
    outsider = await register_user(client, "outsider@example.com")
    org = await _create_org(client, owner)

    payload = dict(JOB_PAYLOAD, organizationId=org["id"])
    response = await client.post("/jobs", json=payload, headers=auth_header(outsider["token"]))
    assert response.status_code == 403

    job = await _create_job(client, owner, org["id"])
    assert job["isActive"] is True
    assert job["organization"]["name"] == "Acme Clinic"


@pytest.mark.asyncio
async def test_list_jobs_filters_and_pages(client, db_session):
    owner = await register_user(client, "lister@example.com")
    org = await _create_org(client, owner)
    cardio = await _create_job(client, owner, org["id"])
    neuro = await _create_job(client, owner, org["id"], specialty="Neurology", location="Chicago, IL")
    closed = await _create_job(client, owner, org["id"], specialty="Cardiology", location="Boston")

    await db_session.execute(update(JobPosting).where(JobPosting.id == closed["id"]).values(is_active=False))
    await db_session.commit()

    everything = (await client.get("/jobs")).json()
    assert [j["id"] for j in everything["jobPostings"]] == [neuro["id"], cardio["id"]]
    assert everything["nextCursor"] is None
    assert everything["jobPostings"][0]["organization"]["id"] == org["id"]
    assert everything["jobPostings"][0]["applications"] == []

    by_specialty = (await client.get("/jobs", params={"specialty": "cardio"})).json()
    assert [j["id"] for j in by_specialty["jobPostings"]] == [cardio["id"]]

    by_location = (await client.get("/jobs", params={"location": "chicago"})).json()
    assert [j["id"] for j in by_location["jobPostings"]] == [neuro["id"]]

    page = (await client.get("/jobs", params={"limit": 1})).json()
    assert [j["id"] for j in page["jobPostings"]] == [neuro["id"]]
    assert page["nextCursor"] == cardio["id"]


@pytest.mark.asyncio
async def test_apply_to_job_flow(client):
    owner = await register_user(client, "acme@example.com")
    applicant = await register_user(client, "applicant@example.com", firstName="Jamie")
    org = await _create_org(client, owner)
    job = await _create_job(client, owner, org["id"])
    apply_url = f"/jobs/{job['id']}/applications"

    response = await client.post(
        apply_url,
        json={"coverLetter": "Hire me", "resumeUrl": "http://minio.test:9000/resumes/user-2/1-cv.pdf"},
        headers=auth_header(applicant["token"]),
    )
    assert response.status_code == 201
    application = response.json()["application"]
    assert application["status"] == "pending"
    assert application["jobPosting"]["organization"]["name"] == "Acme Clinic"
    assert application["user"]["firstName"] == "Jamie"

    again = await client.post(apply_url, json={}, headers=auth_header(applicant["token"]))
    assert again.status_code == 409

    listing = await client.get(apply_url, headers=auth_header(owner["token"]))
    assert listing.status_code == 200
    body = listing.json()
    assert body["jobPosting"]["id"] == job["id"]
    assert [a["id"] for a in body["applications"]] == [application["id"]]
    assert body["applications"][0]["user"]["medicalProfile"]["specialty"] == "Cardiology"

    # the public listing carries the application too
    jobs = (await client.get("/jobs")).json()["jobPostings"]
    assert [a["id"] for a in jobs[0]["applications"]] == [application["id"]]

    forbidden = await client.get(apply_url, headers=auth_header(applicant["token"]))
    assert forbidden.status_code == 403


@pytest.mark.asyncio
async def test_apply_to_missing_or_inactive_job(client, db_session):
    owner = await register_user(client, "inactive@example.com")
    applicant = await register_user(client, "seeker@example.com")
    org = await _create_org(client, owner)
    job = await _create_job(client, owner, org["id"])
    await db_session.execute(update(JobPosting).where(JobPosting.id == job["id"]).values(is_active=False))
    await db_session.commit()

    headers = auth_header(applicant["token"])
    assert (await client.post(f"/jobs/{job['id']}/applications", json={}, headers=headers)).status_code == 404
    assert (await client.post("/jobs/999/applications", json={}, headers=headers)).status_code == 404
    assert (await client.get("/jobs/999/applications", headers=headers)).status_code == 404


@pytest.mark.asyncio
async def test_update_application_status(client):
    owner = await register_user(client, "status@example.com")
    applicant = await register_user(client, "hopeful@example.com")
    org = await _create_org(client, owner)
    job = await _create_job(client, owner, org["id"])
    application = (await client.post(
        f"/jobs/{job['id']}/applications", json={}, headers=auth_header(applicant["token"])
    )).json()["application"]
    url = f"/applications/{application['id']}/status"

    assert (await client.patch(url, json={"status": "accepted"}, headers=auth_header(applicant["token"]))).status_code == 403

    accepted = await client.patch(url, json={"status": "accepted"}, headers=auth_header(owner["token"]))
    assert accepted.status_code == 200
    assert accepted.json()["application"]["status"] == "accepted"
    assert accepted.json()["success"] is True

    # any status may follow any other
    reopened = await client.patch(url, json={"status": "pending"}, headers=auth_header(owner["token"]))
    assert reopened.json()["application"]["status"] == "pending"

    assert (await client.patch(url, json={"status": "hired"}, headers=auth_header(owner["token"]))).status_code == 422
    assert (await client.patch("/applications/999/status", json={"status": "reviewed"},
                               headers=auth_header(owner["token"]))).status_code == 404


@pytest.mark.asyncio
async def test_memberships_include_only_active_jobs(client, db_session):
    owner = await register_user(client, "mine@example.com")
    org = await _create_org(client, owner)
    open_job = await _create_job(client, owner, org["id"])
    closed_job = await _create_job(client, owner, org["id"], title="Closed")
    await db_session.execute(update(JobPosting).where(JobPosting.id == closed_job["id"]).values(is_active=False))
    await db_session.commit()

    memberships = (await client.get("/organizations/mine", headers=auth_header(owner["token"]))).json()["memberships"]
    jobs = memberships[0]["organization"]["jobPostings"]
    assert [j["id"] for j in jobs] == [open_job["id"]]


@pytest.mark.asyncio
async def test_organization_routes_require_auth(client):
    assert (await client.get("/organizations/mine")).status_code == 401
    assert (await client.post("/organizations", json={"name": "x", "type": "y"})).status_code == 401


async def _profileless_token(db_session, email):
    user = User(email=email, password_hash=get_password_hash("x"), first_name="P", last_name="L")
    db_session.add(user)
    await db_session.commit()
    return create_access_token({"user_id": user.id})


@pytest.mark.asyncio
async def test_apply_requires_profile(client, db_session):
    owner = await register_user(client, "profile-owner@example.com")
    org = await _create_org(client, owner)
    job = await _create_job(client, owner, org["id"])
    token = await _profileless_token(db_session, "noprofile@example.com")

    response = await client.post(f"/jobs/{job['id']}/applications", json={}, headers=auth_header(token))
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_concurrent_duplicate_application_conflicts(client):
    owner = await register_user(client, "race-owner@example.com")
    applicant = await register_user(client, "racer@example.com")
    org = await _create_org(client, owner)
    job = await _create_job(client, owner, org["id"])
    url = f"/jobs/{job['id']}/applications"
    assert (await client.post(url, json={}, headers=auth_header(applicant["token"]))).status_code == 201

    # 另一個請求在 pre-check 之後才寫入，只剩 unique constraint 擋得住
    with patch.object(ApplicationRepository, "check_existing_application", AsyncMock(return_value=None)):
        response = await client.post(url, json={}, headers=auth_header(applicant["token"]))
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_concurrent_duplicate_organization_name_conflicts(client):
    owner = await register_user(client, "race-org@example.com")
    await _create_org(client, owner, "Mercy")

    with patch.object(OrganizationRepository, "get_organization_by_name", AsyncMock(return_value=None)):
        response = await client.post(
            "/organizations", json={"name": "Mercy", "type": "Hospital"}, headers=auth_header(owner["token"])
        )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_organization_rolls_back_when_membership_fails(client, db_session):
    owner = await register_user(client, "atomic@example.com")
    failing_member = MagicMock(side_effect=IntegrityError("INSERT INTO organization_members", {}, Exception("boom")))

    with patch("medlink.repositories.organization_repo.OrganizationMember", failing_member):
        response = await client.post(
            "/organizations", json={"name": "Half Made", "type": "Clinic"}, headers=auth_header(owner["token"])
        )
    assert response.status_code == 409

    count = (await db_session.execute(select(func.count()).select_from(Organization))).scalar_one()
    assert count == 0


@pytest.mark.asyncio
async def test_string_fields_are_bounded(client):
    owner = await register_user(client, "bounded@example.com")
    headers = auth_header(owner["token"])

    response = await client.post(
        "/organizations",
        json={"name": "Long Site", "type": "Clinic", "website": "https://example.com/" + "a" * 500},
        headers=headers,
    )
    assert response.status_code == 422
    response = await client.post(
        "/organizations", json={"name": "Long Place", "type": "Clinic", "location": "x" * 256}, headers=headers
    )
    assert response.status_code == 422

    org = await _create_org(client, owner)
    payload = dict(JOB_PAYLOAD, organizationId=org["id"], salary="9" * 101)
    assert (await client.post("/jobs", json=payload, headers=headers)).status_code == 422

    job = await _create_job(client, owner, org["id"])
    response = await client.post(
        f"/jobs/{job['id']}/applications", json={"resumeUrl": "http://x/" + "a" * 500}, headers=headers
    )
    assert response.status_code == 422
