"""File-based storage implementation."""

import logging
import os
import tempfile
from urllib.parse import quote

from core.errors import StorageUnavailable
from core.interfaces import Storage

logger = logging.getLogger(__name__)


class FileStorage(Storage):
    """Stores each key in its own JSON file under state_dir."""

    def __init__(self, state_dir: str = None):
        self.state_dir = state_dir or os.path.expanduser('~/.local/share/auralingo')

    def _get_file(self, key: str) -> str:
        """Get file path for a key. Percent-encoding keeps distinct keys in distinct files."""
        safe_key = quote(key, safe='')
        return os.path.join(self.state_dir, f'auralingo_{safe_key}.json')

    def get(self, key: str) -> str | None:
        path = self._get_file(key)
        if not os.path.exists(path):
            return None
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return f.read()
        except OSError as e:
            raise StorageUnavailable(f"Cannot read {path}: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self._get_file(key)
        try:
            os.makedirs(self.state_dir, exist_ok=True)
            # Write to a sibling temp file, then swap it in
            fd, tmp_path = tempfile.mkstemp(dir=self.state_dir, prefix='.auralingo_', suffix='.tmp')
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    f.write(value)
                os.replace(tmp_path, path)
                logger.debug(f"Saved '{key}' to {path}")
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            raise StorageUnavailable(f"Cannot write {path}: {e}") from e

    def delete(self, key: str) -> None:
        path = self._get_file(key)
        try:
            if os.path.exists(path):
                os.remove(path)
        except OSError as e:
            raise StorageUnavailable(f"Cannot delete {path}: {e}") from e

