"""Entity path formatter.

ONLY entity-aware naming - places files under the record that owns them,
e.g. ``articles/42/cover.jpg``.
"""

import re
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Tuple

from ...core.exceptions import ConfigurationError, InvalidInputError
from .base import BaseFormatter


TOKEN_PATTERN = re.compile(r"\{([a-z-]+)\}")


class EntityFormatter(BaseFormatter):
    """Pattern based formatter driven by the owning entity.

    Tokens:
    - ``{entity-type}`` / ``{entity-id}`` from the auxiliary data
    - ``{file-name}`` / ``{file-ext}`` from the uploaded filename
    - ``{unique}`` a random segment
    - ``{date-y}``, ``{date-m}``, ``{date-d}`` the current UTC date

    Auxiliary data is either a mapping with ``type`` and ``id`` keys or an
    object with an ``id`` attribute; its type comes from an ``entity_type``
    attribute or falls back to the class name.
    """

    DEFAULT_PATTERN = "{entity-type}/{entity-id}/{file-name}.{file-ext}"

    def __init__(self, pattern: str = DEFAULT_PATTERN, base_dir: str = ""):
        super().__init__(base_dir=base_dir)
        self._pattern = pattern

    @property
    def pattern(self) -> str:
        return self._pattern

    def get_path(self) -> str:
        stem, ext = self.split_filename()
        entity_type, entity_id = self._entity_reference()

        pattern = self._pattern
        if not ext:
            pattern = pattern.replace(".{file-ext}", "{file-ext}")

        now = datetime.now(timezone.utc)
        replacements: Dict[str, str] = {
            "entity-type": entity_type,
            "entity-id": entity_id,
            "file-name": self.slugify(stem),
            "file-ext": ext,
            "date-y": f"{now:%Y}",
            "date-m": f"{now:%m}",
            "date-d": f"{now:%d}",
        }

        def substitute(match: "re.Match[str]") -> str:
            token = match.group(1)
            if token == "unique":
                return self.unique_token()
            if token not in replacements:
                raise ConfigurationError(
                    f'Unknown token "{{{token}}}" in formatter pattern "{self._pattern}"',
                    component="formatter",
                    name="Entity"
                )
            return replacements[token]

        return self.join(self._base_dir, TOKEN_PATTERN.sub(substitute, pattern))

    def _entity_reference(self) -> Tuple[str, str]:
        data: Any = self.data
        if data is None:
            raise InvalidInputError(
                "Entity formatter requires auxiliary data identifying the owning entity"
            )

        if isinstance(data, Mapping):
            entity_type = data.get("type") or data.get("entity_type")
            entity_id = data.get("id")
        else:
            entity_type = getattr(data, "entity_type", None) or type(data).__name__
            entity_id = getattr(data, "id", None)

        if entity_id is None or str(entity_id) == "":
            raise InvalidInputError("Entity formatter data has no identifier")
        if not entity_type:
            raise InvalidInputError("Entity formatter data has no entity type")

        return self.slugify(str(entity_type)), self.slugify(str(entity_id))
