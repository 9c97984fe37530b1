"""Filesystem service.

ONLY storage coordination - uploads, existence checks, deletes, renames and
hash-based reconciliation of entity sets, with lifecycle hooks fired around
every mutating operation.

Following maximum separation architecture - one file = one purpose.
"""

import importlib
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union

from loguru import logger

from ...config.settings import FilesystemSettings, load_settings
from ...core.entities import FileEntity
from ...core.exceptions import ConfigurationError, InvalidInputError, UploadFailedError
from ...core.protocols import FileEntityProtocol, PathFormatter, StorageAdapter
from ...infrastructure.adapters import AdapterRegistry
from ..formatters import FormatterRegistry
from ..hooks import FilesystemHook, HookBus
from ..normalizers import FileSourceNormalizer


EntityFactory = Callable[..., FileEntityProtocol]


class Filesystem:
    """Storage coordinator.

    Decouples "store a file, get back an identity" from the storage medium
    (the adapter) and from naming (the formatter). Entities are returned to
    the caller and never retained; persisting them is the caller's job.

    The adapter and formatter are resolved lazily from settings on first
    use. ``set_adapter``/``set_formatter`` are setup-time mutators and must
    not be interleaved with uploads running on other threads.
    """

    def __init__(
        self,
        config: Union[FilesystemSettings, Mapping[str, Any], None] = None,
        *,
        hooks: Optional[HookBus] = None,
        adapters: Optional[AdapterRegistry] = None,
        formatters: Optional[FormatterRegistry] = None,
        entity_factory: Optional[EntityFactory] = None
    ):
        """Initialize filesystem.

        Args:
            config: Settings or a mapping of settings values
            hooks: Hook bus to dispatch lifecycle events on
            adapters: Adapter registry used to resolve adapter names
            formatters: Formatter registry used to resolve formatter names
            entity_factory: Callable building entities, overrides ``entity_class``
        """
        self._settings = load_settings(config)
        self._hooks = hooks or HookBus()
        self._adapters = adapters or AdapterRegistry()
        self._formatters = formatters or FormatterRegistry()
        self._entity_factory = entity_factory

        self._adapter: Optional[StorageAdapter] = None
        self._formatter: Optional[PathFormatter] = None
        self._normalizer: Optional[FileSourceNormalizer] = None

    @property
    def settings(self) -> FilesystemSettings:
        return self._settings

    @property
    def hooks(self) -> HookBus:
        return self._hooks

    # Configuration

    def set_adapter(self, adapter: Union[str, StorageAdapter], **options: Any) -> "Filesystem":
        """Set the storage adapter.

        Args:
            adapter: Registered adapter name or adapter instance
            **options: Constructor arguments when ``adapter`` is a name

        Raises:
            ConfigurationError: If the adapter cannot be resolved
        """
        self._adapter = self._adapters.resolve(adapter, **options)
        return self

    def get_adapter(self) -> StorageAdapter:
        """Return the adapter, resolving it from settings on first use.

        Raises:
            ConfigurationError: If the configured adapter cannot be resolved
        """
        if self._adapter is None:
            self._adapter = self._adapters.resolve(
                self._settings.adapter,
                **self._settings.adapter_options()
            )
        return self._adapter

    def set_formatter(self, formatter: Union[str, PathFormatter], **options: Any) -> "Filesystem":
        """Set the default formatter.

        Args:
            formatter: Registered formatter name or formatter instance
            **options: Constructor arguments when ``formatter`` is a name

        Raises:
            ConfigurationError: If the formatter cannot be resolved
        """
        self._formatter = self._formatters.resolve(formatter, **options)
        return self

    def get_formatter(self) -> PathFormatter:
        """Return the default formatter, resolving it from settings on first use."""
        if self._formatter is None:
            self.set_formatter(self._settings.formatter, **self._settings.formatter_arguments)
        return self._formatter

    @property
    def normalizer(self) -> FileSourceNormalizer:
        if self._normalizer is None:
            self._normalizer = FileSourceNormalizer(self._settings.entity_hash_algo)
        return self._normalizer

    def reset(self) -> "Filesystem":
        """Drop the resolved formatter so the next upload re-reads settings."""
        self._formatter = None
        return self

    def new_entity(self, **fields: Any) -> FileEntityProtocol:
        """Build an entity with the configured entity factory."""
        return self._resolve_entity_factory()(**fields)

    # Operations

    def upload(
        self,
        source: Any,
        formatter: Union[str, PathFormatter, None] = None,
        data: Optional[Any] = None,
        formatter_options: Optional[Mapping[str, Any]] = None
    ) -> FileEntityProtocol:
        """Upload a file.

        Entities are returned unchanged. Anything else is normalized, named
        by the formatter, written through the adapter and turned into a new
        entity.

        Args:
            source: Path, upload mapping, upload object or entity
            formatter: Formatter name or instance for this call only
            data: Auxiliary data handed to the formatter
            formatter_options: Constructor arguments when ``formatter`` is a name

        Raises:
            InvalidInputError: If the source cannot be normalized
            ConfigurationError: If the formatter or adapter cannot be resolved
            UploadFailedError: If the adapter did not store the content
        """
        if self._is_entity(source):
            return source

        path_formatter = self._formatter_for_call(formatter, formatter_options)
        adapter = self.get_adapter()
        filedata = self.normalizer.normalize(source)

        try:
            dest_path = path_formatter.set_info(filedata.filename, data).get_path()

            self._hooks.dispatch(
                FilesystemHook.BEFORE_UPLOAD,
                self,
                source=filedata,
                formatter=path_formatter,
                path=dest_path
            )

            try:
                written = adapter.write(dest_path, filedata.resource)
            except OSError as e:
                logger.warning(f"Upload of {filedata.filename} to {dest_path} failed: {e}")
                raise UploadFailedError(
                    f'Upload of "{filedata.filename}" to "{dest_path}" failed: {e}',
                    path=dest_path,
                    filename=filedata.filename,
                    adapter=type(adapter).__name__
                ) from e

            if not written:
                logger.warning(f"Adapter refused upload of {filedata.filename} to {dest_path}")
                raise UploadFailedError(
                    f'Upload of "{filedata.filename}" to "{dest_path}" failed',
                    path=dest_path,
                    filename=filedata.filename,
                    adapter=type(adapter).__name__
                )

            entity = self.new_entity(
                path=dest_path,
                original_filename=filedata.filename,
                filesize=filedata.size,
                mime=filedata.mime,
                hash=filedata.hash
            )

            self._hooks.dispatch(FilesystemHook.AFTER_UPLOAD, self, entity=entity, source=filedata)
            logger.debug(f"Uploaded {filedata.filename} to {dest_path}")

            return entity
        finally:
            filedata.shutdown()

    def upload_many(self, sources: Iterable[Any], **options: Any) -> List[FileEntityProtocol]:
        """Upload files in order with the same options.

        The first failure propagates; later sources are not touched.
        """
        result = []
        for source in sources:
            result.append(self.upload(source, **options))

        return result

    def exists(self, entity: FileEntityProtocol) -> bool:
        """Check whether the entity's path is stored.

        A path the adapter rejects as a key is reported as missing.
        """
        adapter = self.get_adapter()
        try:
            return adapter.exists(entity.path)
        except InvalidInputError as e:
            logger.warning(f"Unusable storage key {entity.path!r}: {e}")
            return False

    def read(self, entity: FileEntityProtocol) -> bytes:
        """Return the stored bytes of an entity.

        Raises:
            FileNotFoundError: If nothing is stored at the entity's path
        """
        return self.get_adapter().read(entity.path)

    def delete(self, entity: FileEntityProtocol) -> Any:
        """Delete the stored file of an entity.

        Returns:
            True when the file existed and was deleted, False when it was
            missing or the adapter failed, or the substitute result of a
            listener that stopped ``beforeDelete``
        """
        event = self._hooks.dispatch(FilesystemHook.BEFORE_DELETE, self, entity=entity)

        if event.stopped:
            logger.info(f"Delete of {entity.path} stopped by listener '{event.stopped_by}'")
            return event.result

        if self.exists(entity) and self.get_adapter().delete(entity.path):
            self._hooks.dispatch(FilesystemHook.AFTER_DELETE, self, entity=entity)
            logger.debug(f"Deleted {entity.path}")
            return True

        return False

    def rename(self, entity: FileEntityProtocol, new_path: str) -> Any:
        """Move an entity's file and update ``entity.path`` in place.

        The caller must persist the updated entity.

        Returns:
            True on success, False when the adapter failed (the entity is
            left untouched), or the substitute result of a listener that
            stopped ``beforeRename``
        """
        event = self._hooks.dispatch(
            FilesystemHook.BEFORE_RENAME,
            self,
            entity=entity,
            new_path=new_path
        )

        if event.stopped:
            logger.info(f"Rename of {entity.path} stopped by listener '{event.stopped_by}'")
            return event.result

        old_path = entity.path
        adapter = self.get_adapter()
        try:
            renamed = adapter.rename(old_path, new_path)
        except InvalidInputError as e:
            logger.warning(f"Rename of {old_path!r} to {new_path!r} rejected: {e}")
            renamed = False

        if renamed:
            entity.path = new_path
            self._hooks.dispatch(FilesystemHook.AFTER_RENAME, self, entity=entity, old_path=old_path)
            logger.debug(f"Renamed {old_path} to {new_path}")
            return True

        return False

    def merge_entities(
        self,
        entities: Optional[Iterable[FileEntityProtocol]],
        data: Optional[Iterable[Any]],
        remove_hashes: Optional[Iterable[str]] = None,
        remove_file: bool = False,
        **upload_options: Any
    ) -> List[FileEntityProtocol]:
        """Merge entity sets by content hash.

        Existing entities are keyed by hash first, then every item of
        ``data`` (uploaded first unless it already is an entity). The last
        entity seen for a hash wins but keeps the position where the hash
        first appeared.

        Args:
            entities: Entities currently referenced, may be empty or None
            data: New entities or sources to upload, may be empty or None
            remove_hashes: Hashes to drop from the result
            remove_file: Also delete the stored files of dropped entities
            **upload_options: Passed to ``upload`` for raw sources

        Returns:
            Surviving entities in first-seen hash order
        """
        merged: Dict[str, FileEntityProtocol] = {}

        for entity in entities or []:
            merged[entity.hash] = entity

        for item in data or []:
            entity = item if self._is_entity(item) else self.upload(item, **upload_options)
            merged[entity.hash] = entity

        if remove_hashes:
            if isinstance(remove_hashes, str):
                remove_hashes = [remove_hashes]
            hashes_to_remove = set(remove_hashes)

            for hash_value, entity in list(merged.items()):
                if hash_value in hashes_to_remove:
                    if remove_file:
                        # Best effort, the delete result is not reported
                        self.delete(entity)
                    del merged[hash_value]

        return list(merged.values())

    # Internals

    def _formatter_for_call(
        self,
        formatter: Union[str, PathFormatter, None],
        options: Optional[Mapping[str, Any]]
    ) -> PathFormatter:
        if formatter is None:
            return self.get_formatter()
        return self._formatters.resolve(formatter, **dict(options or {}))

    @staticmethod
    def _is_entity(value: Any) -> bool:
        return not isinstance(value, type) and isinstance(value, FileEntityProtocol)

    def _resolve_entity_factory(self) -> EntityFactory:
        if self._entity_factory is not None:
            return self._entity_factory

        dotted = self._settings.entity_class
        if not dotted:
            self._entity_factory = FileEntity
            return self._entity_factory

        module_name, _, attribute = dotted.rpartition(".")
        try:
            module = importlib.import_module(module_name)
            factory = getattr(module, attribute)
        except (ImportError, AttributeError, ValueError) as e:
            raise ConfigurationError(
                f'Entity class "{dotted}" could not be loaded',
                component="entity_class",
                name=dotted
            ) from e

        if not callable(factory):
            raise ConfigurationError(
                f'Entity class "{dotted}" is not callable',
                component="entity_class",
                name=dotted
            )

        self._entity_factory = factory
        return self._entity_factory

    def __repr__(self) -> str:
        return (
            f"Filesystem(adapter={self._settings.adapter!r}, "
            f"formatter={self._settings.formatter!r}, "
            f"hash={self._settings.entity_hash_algo!r})"
        )
