# patoshub/storage.py

import logging
import posixpath
import random
import re
import time
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import cloudinary.uploader
import requests

from .config import Settings

logger = logging.getLogger(__name__)

IMAGEKIT_UPLOAD_URL = "https://upload.imagekit.io/api/v1/files/upload"
IMAGEKIT_API_URL = "https://api.imagekit.io/v1/files"
REQUEST_TIMEOUT = 30  # seconds


class ImageNotFound(Exception):
    """The backend has no object for the given URL."""


def unique_filename(original: str, prefix: str = "image") -> str:
    ext = Path(original).suffix.lower()
    return f"{prefix}-{int(time.time() * 1000)}-{random.randint(0, 10**9)}{ext}"


class StorageBackend:
    name = "base"

    def save(self, content: bytes, filename: str, content_type: str, folder: str, base_url: str) -> str:
        """Store the image and return its public URL."""
        raise NotImplementedError

    def matches(self, url: str) -> bool:
        raise NotImplementedError

    def delete(self, url: str) -> None:
        """Remove the object behind `url`; raise ImageNotFound when there is none."""
        raise NotImplementedError


class ImageKitStorage(StorageBackend):
    name = "imagekit"

    def __init__(self, private_key: str, url_endpoint: str):
        self.private_key = private_key
        self.url_endpoint = url_endpoint.rstrip("/")

    @property
    def _auth(self):
        # ImageKit uses the private key as the basic-auth user, empty password
        return (self.private_key, "")

    def save(self, content, filename, content_type, folder, base_url):
        response = requests.post(
            IMAGEKIT_UPLOAD_URL,
            auth=self._auth,
            files={"file": (filename, content, content_type)},
            data={"fileName": filename, "folder": f"/{folder}", "useUniqueFileName": "true"},
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        return response.json()["url"]

    def matches(self, url):
        return "imagekit.io" in url

    def file_path(self, url: str) -> str:
        """"/folder/name.jpg" for a URL under the configured endpoint."""
        path = urlparse(url).path
        endpoint_path = urlparse(self.url_endpoint).path.rstrip("/")
        if endpoint_path and path.startswith(endpoint_path + "/"):
            return path[len(endpoint_path):]
        # ik.imagekit.io/<imagekit id>/folder/name.jpg
        segments = [s for s in path.split("/") if s]
        return "/" + "/".join(segments[1:])

    def delete(self, url):
        file_path = self.file_path(url)
        folder, name = posixpath.split(file_path)
        response = requests.get(
            IMAGEKIT_API_URL,
            auth=self._auth,
            params={"path": folder or "/", "searchQuery": f'name = "{name}"'},
            timeout=REQUEST_TIMEOUT,
        )
        response.raise_for_status()
        files = response.json()
        if not files:
            raise ImageNotFound(file_path)

        file_id = files[0]["fileId"]
        response = requests.delete(f"{IMAGEKIT_API_URL}/{file_id}", auth=self._auth, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()


class CloudinaryStorage(StorageBackend):
    name = "cloudinary"

    def __init__(self, cloud_name: str, api_key: str, api_secret: str):
        self.credentials = {
            "cloud_name": cloud_name,
            "api_key": api_key,
            "api_secret": api_secret,
        }

    def save(self, content, filename, content_type, folder, base_url):
        result = cloudinary.uploader.upload(
            content,
            folder=folder,
            resource_type="image",
            **self.credentials,
        )
        return result["secure_url"]

    def matches(self, url):
        return "cloudinary.com" in url

    @staticmethod
    def public_id(url: str) -> str:
        """
        Public id from a delivery URL:
        .../image/upload/v1712345678/negocios/logo.png -> negocios/logo
        """
        path = urlparse(url).path
        _, _, tail = path.partition("/upload/")
        tail = re.sub(r"^v\d+/", "", tail)
        return posixpath.splitext(tail)[0]

    def delete(self, url):
        public_id = self.public_id(url)
        result = cloudinary.uploader.destroy(public_id, resource_type="image", **self.credentials)
        if result.get("result") != "ok":
            raise ImageNotFound(public_id)


class LocalStorage(StorageBackend):
    name = "local"

    def __init__(self, directory: str):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)

    def save(self, content, filename, content_type, folder, base_url):
        (self.directory / filename).write_bytes(content)
        return f"{base_url.rstrip('/')}/uploads/{filename}"

    def matches(self, url):
        return True

    def delete(self, url):
        # only the last segment, so a URL cannot point outside the directory
        filename = Path(urlparse(url).path).name
        target = self.directory / filename
        if not filename or not target.is_file():
            raise ImageNotFound(filename)
        target.unlink()


class ImageStorage:
    """
    Resolved storage behind the upload routes.

    Uploads go to the first backend, chosen once at startup: ImageKit when its
    three credentials are set, otherwise Cloudinary when its three are set,
    otherwise the local upload directory. Deletion only receives the public
    URL, so it goes to the first backend that recognises it.
    """

    def __init__(self, backends: list[StorageBackend]):
        self.backends = backends

    @property
    def uploader(self) -> StorageBackend:
        return self.backends[0]

    @property
    def name(self) -> str:
        return self.uploader.name

    def save(self, content: bytes, filename: str, content_type: str, folder: str, base_url: str) -> str:
        return self.uploader.save(content, filename, content_type, folder, base_url)

    def backend_for(self, url: str) -> Optional[StorageBackend]:
        return next((b for b in self.backends if b.matches(url)), None)

    def delete(self, url: str) -> str:
        backend = self.backend_for(url)
        if backend is None:
            raise ImageNotFound(url)
        backend.delete(url)
        return backend.name


def build_storage(settings: Settings) -> ImageStorage:
    backends: list[StorageBackend] = []
    if settings.imagekit_configured:
        backends.append(ImageKitStorage(
            settings.imagekit_private_key,
            settings.imagekit_url_endpoint,
        ))
    if settings.cloudinary_configured:
        backends.append(CloudinaryStorage(
            settings.cloudinary_cloud_name,
            settings.cloudinary_api_key,
            settings.cloudinary_api_secret,
        ))
    backends.append(LocalStorage(settings.upload_dir))

    storage = ImageStorage(backends)
    logger.info("Image storage backend: %s", storage.name)
    return storage
