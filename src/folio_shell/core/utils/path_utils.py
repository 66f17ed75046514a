# src/folio_shell/core/utils/path_utils.py
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving important package paths.
    Paths are resolved relative to this file so they work from a source checkout
    and from an installed distribution alike.
    """

    @staticmethod
    def get_shell_package_root() -> Path:
        """Returns the folio_shell package directory (where settings.json lives)."""
        return Path(__file__).resolve().parents[2]

    @staticmethod
    def get_settings_path() -> Path:
        return PathUtils.get_shell_package_root() / "settings.json"

    @staticmethod
    def ensure_parent_dir(path: Path) -> Path:
        """Creates the parent directory of an output file if needed and returns the path."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        return path
