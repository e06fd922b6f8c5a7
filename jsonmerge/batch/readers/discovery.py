"""
Input file discovery.
"""

import re
from pathlib import Path

from jsonmerge.core.exceptions import DiscoveryError
from jsonmerge.observability.logger import get_logger


logger = get_logger(__name__)


class FileDiscovery:
    """
    Resolves an input path into an ordered list of JSON files.

    A file path is returned as-is. A directory is searched recursively
    for ``*.json`` files, optionally filtered by a regular expression
    matched against each file's basename.
    """

    def __init__(self, glob_pattern: str = "**/*.json"):
        self.glob_pattern = glob_pattern

    def discover(self, input_path: str | Path, pattern: str | None = None) -> list[str]:
        """
        Discover input files.

        Args:
            input_path: File or directory to read from
            pattern: Optional regex applied to file basenames

        Returns:
            Sorted list of absolute file paths

        Raises:
            DiscoveryError: If the input path does not exist or the pattern is invalid
        """
        path = Path(input_path)

        if path.is_file():
            return [str(path.resolve())]

        if not path.is_dir():
            raise DiscoveryError(f"Input path {input_path} does not exist")

        files = sorted(str(p.resolve()) for p in path.glob(self.glob_pattern) if p.is_file())

        if pattern:
            try:
                regex = re.compile(pattern)
            except re.error as e:
                raise DiscoveryError(f"Invalid file pattern '{pattern}': {e}") from e
            files = [f for f in files if regex.search(Path(f).name)]

        logger.debug(f"Discovered {len(files)} files under {path}")
        return files
