"""
Logo Asset Store.

Writes uploaded company logos into the public uploads directory and hands
back the root-relative path the app serves them from.
"""
import logging
import re
import time
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Callable, Optional, Union

from remotetrail.core.errors import AssetWriteError

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s")


def sanitize_filename(original_name: Optional[str]) -> str:
    """Strip directory parts and replace whitespace with underscores."""
    name = original_name or ""
    # Browsers on Windows may send a full path
    name = PureWindowsPath(PurePosixPath(name).name).name
    name = _WHITESPACE.sub("_", name)
    if name in ("", ".", ".."):
        return "logo"
    return name


class LogoStore:
    """Stores logos under `directory`, served at `url_prefix`."""

    def __init__(
        self,
        directory: Union[str, Path],
        url_prefix: str = "/uploads",
        clock: Callable[[], float] = time.time,
    ):
        self.directory = Path(directory)
        self.url_prefix = "/" + url_prefix.strip("/")
        self._clock = clock

    def put(self, data: bytes, original_name: Optional[str]) -> str:
        """
        Persist one image and return its public path.

        The file name is the current time in milliseconds plus the sanitized
        original name, so uploads don't collide in practice.

        Raises:
            AssetWriteError: If the directory can't be created or the write fails
        """
        file_name = f"{int(self._clock() * 1000)}_{sanitize_filename(original_name)}"
        target = self.directory / file_name
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            logger.error(f"Failed to store logo {file_name}: {e}")
            raise AssetWriteError(f"Failed to store logo {file_name}") from e

        public_path = f"{self.url_prefix}/{file_name}"
        logger.info(f"Logo stored: path={public_path}, bytes={len(data)}")
        return public_path

    def resolve(self, public_path: Optional[str]) -> Optional[Path]:
        """Map a public path back to a file inside the store, or None."""
        if not public_path or not public_path.startswith(self.url_prefix + "/"):
            return None
        name = public_path[len(self.url_prefix) + 1:]
        if not name or "/" in name or "\\" in name or name in (".", ".."):
            return None
        return self.directory / name

    def exists(self, public_path: Optional[str]) -> bool:
        path = self.resolve(public_path)
        return path is not None and path.is_file()
