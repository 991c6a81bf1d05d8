from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from medlink.core.config import settings
from medlink.core.storage import ObjectStorage
from conftest import auth_header, register_user


def _mock_s3_session(url="http://minio.test:9000/resumes/signed"):
    s3_client = MagicMock()
    s3_client.generate_presigned_url = AsyncMock(return_value=url)
    client_cm = MagicMock()
    client_cm.__aenter__ = AsyncMock(return_value=s3_client)
    client_cm.__aexit__ = AsyncMock(return_value=None)
    session = MagicMock()
    session.client.return_value = client_cm
    return session, s3_client


@pytest.mark.asyncio
async def test_resume_upload_url(client):
    user = await register_user(client, "upload@example.com")
    session, s3_client = _mock_s3_session()

    with patch("medlink.core.storage.aioboto3.Session", return_value=session):
        response = await client.post(
            "/uploads/resume-url",
            json={"fileName": "resume.pdf", "contentType": "application/pdf"},
            headers=auth_header(user["token"]),
        )

    assert response.status_code == 200
    body = response.json()
    assert body["presignedUrl"] == "http://minio.test:9000/resumes/signed"
    prefix, _, rest = body["fileName"].partition("/")
    assert prefix == f"user-{user['user']['id']}"
    timestamp, _, name = rest.partition("-")
    assert timestamp.isdigit()
    assert name == "resume.pdf"

    s3_client.generate_presigned_url.assert_awaited_once_with(
        "put_object",
        Params={"Bucket": settings.RESUME_BUCKET, "Key": body["fileName"], "ContentType": "application/pdf"},
        ExpiresIn=settings.RESUME_UPLOAD_EXPIRE_SECONDS,
    )


@pytest.mark.asyncio
async def test_resume_upload_url_requires_auth(client):
    response = await client.post(
        "/uploads/resume-url", json={"fileName": "resume.pdf", "contentType": "application/pdf"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_storage_base_url(client):
    response = await client.get("/uploads/base-url")
    assert response.status_code == 200
    assert response.json() == {"baseUrl": "http://minio.test:9000"}


@pytest.mark.asyncio
async def test_presigned_url_rejects_blank_bucket_or_key():
    storage = ObjectStorage.from_settings(settings)
    with pytest.raises(ValueError):
        await storage.get_presigned_upload_url("", "user-1/cv.pdf", "application/pdf", 60)
    with pytest.raises(ValueError):
        await storage.get_presigned_upload_url("resumes", "", "application/pdf", 60)
