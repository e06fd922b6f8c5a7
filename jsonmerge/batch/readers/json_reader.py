"""
JSON record reader.

Turns a file holding either a single JSON object or an array of objects
into a flat list of records.
"""

import json
from pathlib import Path
from typing import Any

from jsonmerge.core.exceptions import FileSkipError


def _reject_constant(name: str) -> Any:
    # json accepts NaN and Infinity, which are not valid JSON
    raise ValueError(f"non-standard constant {name}")


class JsonFileReader:
    """
    Reads JSON files into lists of records.
    """

    def __init__(self, encoding: str = "utf-8"):
        """
        Initialize JSON reader.

        Args:
            encoding: Text encoding of the input files
        """
        self.encoding = encoding

    def read_text(self, file_path: str | Path) -> str:
        """
        Read the raw content of a file.

        Raises:
            OSError: If the file cannot be read
        """
        return Path(file_path).read_text(encoding=self.encoding)

    def parse(self, content: str, file_path: str | Path = "<string>") -> list[dict[str, Any]]:
        """
        Parse JSON text into records.

        Args:
            content: Raw JSON text
            file_path: Source path, used in error messages

        Returns:
            List of records (an object yields a single record)

        Raises:
            FileSkipError: If the text is not valid JSON or does not hold objects
        """
        try:
            parsed = json.loads(content, parse_constant=_reject_constant)
        except ValueError as e:
            raise FileSkipError(str(file_path), f"invalid JSON: {e}") from e

        records = parsed if isinstance(parsed, list) else [parsed]

        for idx, record in enumerate(records):
            if not isinstance(record, dict):
                raise FileSkipError(
                    str(file_path),
                    f"expected a JSON object at index {idx}, got {type(record).__name__}"
                )

        return records

    def read_records(self, file_path: str | Path) -> list[dict[str, Any]]:
        """
        Read and parse a file into records.

        Args:
            file_path: Path to the JSON file

        Returns:
            List of records

        Raises:
            OSError: If the file cannot be read
            FileSkipError: If the content cannot be parsed
        """
        return self.parse(self.read_text(file_path), file_path)
