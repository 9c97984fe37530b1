"""Default path formatter.

ONLY filename-based naming - derives the key from the slugged filename and
extension plus a random segment; auxiliary data is ignored.
"""

from .base import BaseFormatter


class DefaultFormatter(BaseFormatter):
    """Formats keys as ``[base_dir/]<slug>-<token>.<ext>``.

    With ``unique=False`` the token is left out and the key becomes a pure
    function of the filename.
    """

    def __init__(self, base_dir: str = "", unique: bool = True):
        super().__init__(base_dir=base_dir)
        self._unique = unique

    def get_path(self) -> str:
        stem, ext = self.split_filename()

        name = self.slugify(stem)
        if self._unique:
            name = f"{name}-{self.unique_token()}"

        return self.join(self._base_dir, self.with_extension(name, ext))
