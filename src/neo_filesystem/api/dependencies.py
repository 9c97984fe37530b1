"""Filesystem dependencies.

ONLY filesystem dependencies - provides FastAPI dependency injection for
the filesystem registry and named filesystems.

Usage in endpoints:

```python
from fastapi import Depends, FastAPI, UploadFile
from neo_filesystem import FilesystemRegistry
from neo_filesystem.api import get_default_filesystem, install_filesystems

app = FastAPI()
install_filesystems(app, FilesystemRegistry({"default": {"adapter": "Local"}}))

@app.post("/files")
def upload(file: UploadFile, fs=Depends(get_default_filesystem)):
    return fs.upload(file).to_dict()
```
"""

from typing import Annotated, Callable

from fastapi import Depends, FastAPI, Request

from ..application.services import Filesystem
from ..config.constants import DEFAULT_FS_CONFIG
from ..core.exceptions import ConfigurationError
from ..infrastructure.registry import FilesystemRegistry


def install_filesystems(app: FastAPI, registry: FilesystemRegistry) -> None:
    """Attach a registry to the application state."""
    app.state.filesystems = registry


def get_filesystem_registry(request: Request) -> FilesystemRegistry:
    """Get the filesystem registry from application state."""
    registry = getattr(request.app.state, "filesystems", None)
    if registry is None:
        raise ConfigurationError(
            "No filesystem registry installed on app.state.filesystems",
            component="registry"
        )
    return registry


def filesystem_dependency(name: str = DEFAULT_FS_CONFIG) -> Callable[..., Filesystem]:
    """Build a dependency returning the filesystem configured as ``name``."""

    def get_filesystem(
        registry: Annotated[FilesystemRegistry, Depends(get_filesystem_registry)]
    ) -> Filesystem:
        return registry.get(name)

    return get_filesystem


get_default_filesystem = filesystem_dependency()
