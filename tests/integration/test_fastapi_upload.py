"""Integration tests for the FastAPI dependencies and exception handlers."""

import hashlib

import pytest
from fastapi import Depends, FastAPI, UploadFile
from fastapi.testclient import TestClient

from neo_filesystem import Filesystem, FilesystemRegistry, MemoryAdapter
from neo_filesystem.api import (
    filesystem_dependency,
    get_default_filesystem,
    install_filesystems,
    register_exception_handlers,
)


class RefusingAdapter(MemoryAdapter):

    def write(self, key, stream):
        return False


def build_app(registry=None):
    app = FastAPI()
    register_exception_handlers(app)
    if registry is not None:
        install_filesystems(app, registry)

    @app.post("/files")
    def upload_file(file: UploadFile, fs: Filesystem = Depends(get_default_filesystem)):
        return fs.upload(file).to_dict()

    @app.post("/articles/{article_id}/cover")
    def upload_cover(
        article_id: int,
        file: UploadFile,
        fs: Filesystem = Depends(filesystem_dependency("covers")),
    ):
        return fs.upload(file, data={"type": "articles", "id": article_id}).to_dict()

    @app.post("/broken")
    def upload_broken(fs: Filesystem = Depends(get_default_filesystem)):
        return fs.upload({"name": "broken.txt"}).to_dict()

    return app


@pytest.fixture
def registry():
    return FilesystemRegistry({
        "default": {"adapter": "Memory"},
        "covers": {"adapter": "Memory", "formatter": "Entity"},
    })


@pytest.fixture
def client(registry):
    return TestClient(build_app(registry))


class TestUploadEndpoint:
    """Test uploads through FastAPI."""

    def test_upload_file(self, client, registry):
        content = b"hello world\n"

        response = client.post("/files", files={"file": ("hello.txt", content, "text/plain")})

        assert response.status_code == 200
        body = response.json()
        assert body["originalFilename"] == "hello.txt"
        assert body["filesize"] == len(content)
        assert body["mime"] == "text/plain"
        assert body["hash"] == hashlib.md5(content).hexdigest()
        assert body["path"].startswith("hello-")
        assert registry.get().get_adapter().read(body["path"]) == content

    def test_named_filesystem(self, client, registry):
        response = client.post(
            "/articles/42/cover",
            files={"file": ("Cover.JPG", b"\xff\xd8\xff\xe0jpeg", "image/jpeg")},
        )

        assert response.status_code == 200
        assert response.json()["path"] == "articles/42/cover.jpg"
        assert registry.exists("covers")
        assert not registry.exists("default")


class TestErrorResponses:
    """Test FilesystemError rendering."""

    def test_invalid_input_is_400(self, client):
        response = client.post("/broken")

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "INVALID_INPUT"
        assert error["type"] == "InvalidInputError"
        assert error["details"] == {"source_type": "mapping"}

    def test_missing_registry_is_500(self):
        client = TestClient(build_app())

        response = client.post("/broken")

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "CONFIGURATION_ERROR"

    def test_unknown_filesystem_is_500(self):
        client = TestClient(build_app(FilesystemRegistry({"default": {"adapter": "Memory"}})))

        response = client.post(
            "/articles/1/cover",
            files={"file": ("a.jpg", b"jpeg", "image/jpeg")},
        )

        assert response.status_code == 500
        assert response.json()["error"]["details"] == {"component": "registry", "name": "covers"}

    def test_refused_write_is_502(self, registry):
        registry.register("default", Filesystem().set_adapter(RefusingAdapter()))
        client = TestClient(build_app(registry))

        response = client.post("/files", files={"file": ("a.txt", b"a", "text/plain")})

        assert response.status_code == 502
        error = response.json()["error"]
        assert error["code"] == "UPLOAD_FAILED"
        assert error["details"]["filename"] == "a.txt"
        assert error["details"]["adapter"] == "RefusingAdapter"
