"""
Tests for storage backend selection and URL-based deletion routing.
"""

import cloudinary.uploader
import pytest

from patoshub.storage import (
    CloudinaryStorage,
    ImageKitStorage,
    ImageNotFound,
    ImageStorage,
    LocalStorage,
    build_storage,
)

IMAGEKIT = {
    "imagekit_public_key": "public_x",
    "imagekit_private_key": "private_x",
    "imagekit_url_endpoint": "https://ik.imagekit.io/demo",
}
CLOUDINARY = {
    "cloudinary_cloud_name": "demo",
    "cloudinary_api_key": "123",
    "cloudinary_api_secret": "abc",
}


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def json(self):
        return self.payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise RuntimeError(f"HTTP {self.status_code}")


class TestSelection:

    def test_local_without_credentials(self, settings):
        storage = build_storage(settings)

        assert storage.name == "local"
        assert [b.name for b in storage.backends] == ["local"]

    def test_imagekit_wins_over_cloudinary(self, settings):
        configured = settings.model_copy(update={**IMAGEKIT, **CLOUDINARY})

        storage = build_storage(configured)

        assert storage.name == "imagekit"
        assert [b.name for b in storage.backends] == ["imagekit", "cloudinary", "local"]

    def test_cloudinary_when_only_it_is_complete(self, settings):
        partial_imagekit = {**IMAGEKIT, "imagekit_private_key": None}
        configured = settings.model_copy(update={**partial_imagekit, **CLOUDINARY})

        assert build_storage(configured).name == "cloudinary"

    def test_imagekit_needs_public_key_too(self, settings):
        configured = settings.model_copy(update={**IMAGEKIT, "imagekit_public_key": None})

        assert build_storage(configured).name == "local"

    def test_selection_is_deterministic(self, settings):
        configured = settings.model_copy(update=IMAGEKIT)

        assert {build_storage(configured).name for _ in range(3)} == {"imagekit"}


class TestImageKit:

    @pytest.fixture
    def backend(self):
        return ImageKitStorage("private_x", "https://ik.imagekit.io/demo")

    def test_file_path_strips_endpoint(self, backend):
        url = "https://ik.imagekit.io/demo/negocios/logo_abc.jpg?tr=w-200"

        assert backend.file_path(url) == "/negocios/logo_abc.jpg"

    def test_delete_lists_then_deletes_first_match(self, backend, monkeypatch):
        calls = []

        def fake_get(url, auth, params, timeout):
            calls.append(("get", params))
            return FakeResponse([{"fileId": "f1"}, {"fileId": "f2"}])

        def fake_delete(url, auth, timeout):
            calls.append(("delete", url))
            return FakeResponse(status_code=204)

        monkeypatch.setattr("patoshub.storage.requests.get", fake_get)
        monkeypatch.setattr("patoshub.storage.requests.delete", fake_delete)

        backend.delete("https://ik.imagekit.io/demo/negocios/logo_abc.jpg")

        assert calls[0] == ("get", {"path": "/negocios", "searchQuery": 'name = "logo_abc.jpg"'})
        assert calls[1] == ("delete", "https://api.imagekit.io/v1/files/f1")

    def test_delete_without_match(self, backend, monkeypatch):
        monkeypatch.setattr("patoshub.storage.requests.get", lambda *a, **kw: FakeResponse([]))

        with pytest.raises(ImageNotFound):
            backend.delete("https://ik.imagekit.io/demo/negocios/gone.jpg")

    def test_upload_returns_url(self, backend, monkeypatch):
        def fake_post(url, auth, files, data, timeout):
            assert data["folder"] == "/negocios"
            assert auth == ("private_x", "")
            return FakeResponse({"url": "https://ik.imagekit.io/demo/negocios/a.png", "fileId": "f9"})

        monkeypatch.setattr("patoshub.storage.requests.post", fake_post)

        url = backend.save(b"png", "a.png", "image/png", "negocios", "http://testserver/")

        assert url == "https://ik.imagekit.io/demo/negocios/a.png"


class TestCloudinary:

    @pytest.fixture
    def backend(self):
        return CloudinaryStorage("demo", "123", "abc")

    @pytest.mark.parametrize("url, public_id", [
        ("https://res.cloudinary.com/demo/image/upload/v1712345678/negocios/logo.png", "negocios/logo"),
        ("https://res.cloudinary.com/demo/image/upload/logo.jpg", "logo"),
    ])
    def test_public_id(self, url, public_id):
        assert CloudinaryStorage.public_id(url) == public_id

    def test_delete_ok(self, backend, monkeypatch):
        destroyed = []

        def fake_destroy(public_id, **options):
            destroyed.append((public_id, options["cloud_name"]))
            return {"result": "ok"}

        monkeypatch.setattr(cloudinary.uploader, "destroy", fake_destroy)

        backend.delete("https://res.cloudinary.com/demo/image/upload/v1/productos/cafe.webp")

        assert destroyed == [("productos/cafe", "demo")]

    def test_delete_not_found(self, backend, monkeypatch):
        monkeypatch.setattr(cloudinary.uploader, "destroy", lambda public_id, **options: {"result": "not found"})

        with pytest.raises(ImageNotFound):
            backend.delete("https://res.cloudinary.com/demo/image/upload/v1/productos/gone.png")

    def test_upload_uses_folder(self, backend, monkeypatch):
        def fake_upload(file, **options):
            assert options["folder"] == "productos"
            return {"secure_url": "https://res.cloudinary.com/demo/image/upload/v1/productos/x.png"}

        monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)

        assert backend.save(b"png", "x.png", "image/png", "productos", "").endswith("productos/x.png")


class TestLocal:

    def test_save_and_delete(self, tmp_path):
        backend = LocalStorage(str(tmp_path))

        url = backend.save(b"data", "image-1.png", "image/png", "general", "http://testserver/")

        assert url == "http://testserver/uploads/image-1.png"
        assert (tmp_path / "image-1.png").read_bytes() == b"data"

        backend.delete(url)
        assert not (tmp_path / "image-1.png").exists()

    def test_delete_missing(self, tmp_path):
        with pytest.raises(ImageNotFound):
            LocalStorage(str(tmp_path)).delete("http://testserver/uploads/nope.png")

    def test_delete_stays_inside_directory(self, tmp_path):
        outside = tmp_path / "secret.png"
        outside.write_bytes(b"x")
        backend = LocalStorage(str(tmp_path / "uploads"))

        with pytest.raises(ImageNotFound):
            backend.delete("http://testserver/uploads/../secret.png")
        assert outside.exists()


class TestDeleteRouting:

    def test_url_shape_picks_backend(self, tmp_path, monkeypatch):
        imagekit = ImageKitStorage("k", "https://ik.imagekit.io/demo")
        local = LocalStorage(str(tmp_path))
        storage = ImageStorage([imagekit, local])

        assert storage.backend_for("https://ik.imagekit.io/demo/a.png") is imagekit
        assert storage.backend_for("http://testserver/uploads/a.png") is local
        # Cloudinary is not configured, so its URLs fall through to local
        assert storage.backend_for("https://res.cloudinary.com/demo/image/upload/a.png") is local

    def test_delete_reports_backend(self, tmp_path):
        (tmp_path / "a.png").write_bytes(b"x")
        storage = ImageStorage([LocalStorage(str(tmp_path))])

        assert storage.delete("http://testserver/uploads/a.png") == "local"
