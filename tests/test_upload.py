from types import SimpleNamespace

from botocore.exceptions import ClientError

from briklyst.routers import upload
from briklyst.services import r2_storage
from tests.support import build_client, create_user, make_session

R2_ENV = {
    "R2_ACCOUNT_ID": "account",
    "R2_ACCESS_KEY_ID": "key",
    "R2_SECRET_ACCESS_KEY": "secret",
    "R2_BUCKET_NAME": "test-bucket",
    "R2_PUBLIC_URL": "https://cdn.example.com/",
}


class FakeClient:
    def __init__(self):
        self.calls = []

    def upload_fileobj(self, file_obj, bucket_name, object_key, ExtraArgs=None):
        self.calls.append(
            {
                "bucket_name": bucket_name,
                "object_key": object_key,
                "payload": file_obj.read(),
                "content_type": ExtraArgs["ContentType"],
            }
        )


def _configure_r2(monkeypatch, client):
    for name, value in R2_ENV.items():
        monkeypatch.setenv(name, value)
    monkeypatch.setattr(r2_storage, "_get_r2_client", lambda: client)
    monkeypatch.setattr(r2_storage, "uuid4", lambda: SimpleNamespace(hex="fixeduuid"))


def test_upload_bytes_builds_per_user_key(monkeypatch):
    fake = FakeClient()
    _configure_r2(monkeypatch, fake)

    url = r2_storage.upload_bytes(
        b"abc",
        user_id=7,
        filename="Hero.JPG",
        content_type="image/jpeg",
        category="banners",
    )

    assert fake.calls == [
        {
            "bucket_name": "test-bucket",
            "object_key": "users/7/banners/fixeduuid.jpg",
            "payload": b"abc",
            "content_type": "image/jpeg",
        }
    ]
    assert url == "https://cdn.example.com/users/7/banners/fixeduuid.jpg"


def test_is_configured_needs_every_variable(monkeypatch):
    for name, value in R2_ENV.items():
        monkeypatch.setenv(name, value)
    assert r2_storage.is_configured() is True

    monkeypatch.setenv("R2_BUCKET_NAME", " ")
    assert r2_storage.is_configured() is False


def test_upload_route_stores_image_in_r2(monkeypatch):
    fake = FakeClient()
    _configure_r2(monkeypatch, fake)
    db = make_session()
    user = create_user(db)
    client = build_client(db, upload.router, user=user)

    response = client.post("/api/upload", files={"file": ("logo.png", b"image-content", "image/png")})

    assert response.status_code == 200
    assert response.json() == {"url": f"https://cdn.example.com/users/{user.id}/storefront/fixeduuid.png"}


def test_upload_route_rejects_non_images(monkeypatch):
    db = make_session()
    client = build_client(db, upload.router, user=create_user(db))

    response = client.post("/api/upload", files={"file": ("notes.txt", b"hello", "text/plain")})

    assert response.status_code == 400
    assert response.json() == {"error": "Only image uploads are supported"}


def test_upload_route_rejects_large_files(monkeypatch):
    monkeypatch.setattr(upload, "MAX_FILE_SIZE_BYTES", 4)
    db = make_session()
    client = build_client(db, upload.router, user=create_user(db))

    response = client.post("/api/upload", files={"file": ("logo.png", b"too-big", "image/png")})

    assert response.status_code == 400
    assert response.json() == {"error": "File exceeds 5MB"}


def test_upload_route_reports_storage_failures(monkeypatch):
    class BrokenClient:
        def upload_fileobj(self, *args, **kwargs):
            raise ClientError({"Error": {"Code": "500", "Message": "boom"}}, "PutObject")

    _configure_r2(monkeypatch, BrokenClient())
    db = make_session()
    client = build_client(db, upload.router, user=create_user(db))

    response = client.post("/api/upload", files={"file": ("logo.png", b"image-content", "image/png")})

    assert response.status_code == 500
    assert response.json() == {"error": "Upload failed"}


def test_upload_route_falls_back_to_local_disk(monkeypatch, tmp_path):
    for name in R2_ENV:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(upload, "UPLOADS_DIR", tmp_path)
    db = make_session()
    client = build_client(db, upload.router, user=create_user(db))

    response = client.post(
        "/api/upload",
        files={"file": ("logo.png", b"image-content", "image/png")},
        headers={"x-forwarded-host": "api.briklyst.com", "x-forwarded-proto": "https"},
    )

    assert response.status_code == 200
    url = response.json()["url"]
    assert url.startswith("https://api.briklyst.com/uploads/")
    stored = tmp_path / url.rsplit("/", 1)[1]
    assert stored.read_bytes() == b"image-content"
