"""
Run configuration for a merge.

Configuration can be built programmatically or loaded from a YAML file:
```yaml
merge:
  input: data/events
  output: out/events.parquet
  pattern: "^events-\\d+"
  validate: true
  batch_size: 5000
  compression: SNAPPY
```
"""

from pathlib import Path
from typing import Any, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from jsonmerge.core.exceptions import ConfigError
from jsonmerge.core.models import CompressionType


DEFAULT_BATCH_SIZE = 1000

# YAML keys accepted in the `merge:` section, mapped to MergeConfig fields
YAML_KEYS = {
    "input": "input_path",
    "input_files": "input_files",
    "output": "output_path",
    "pattern": "filter_pattern",
    "validate": "validate_schema",
    "batch_size": "batch_size",
    "compression": "compression",
}


class MergeConfig(BaseModel):
    """
    Immutable configuration for one merge run.

    Attributes:
        input_path: File or directory to discover input files from
        input_files: Explicit ordered list of input files (bypasses discovery)
        output_path: Destination Parquet file
        filter_pattern: Regex applied to file basenames during discovery
        validate_schema: Skip files whose records do not match the schema's fields
        batch_size: Maximum number of records held before a flush
        compression: Codec applied to every column
    """

    input_path: Optional[str] = None
    input_files: Optional[List[str]] = None
    output_path: str = Field(..., min_length=1)
    filter_pattern: Optional[str] = None
    validate_schema: bool = False
    batch_size: int = Field(DEFAULT_BATCH_SIZE, gt=0)
    compression: CompressionType = CompressionType.UNCOMPRESSED

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "input_path": "data/events",
                "output_path": "out/events.parquet",
                "filter_pattern": "^events-\\d+",
                "validate_schema": True,
                "batch_size": 5000,
                "compression": "SNAPPY"
            }
        }

    @field_validator('compression', mode='before')
    @classmethod
    def normalize_compression(cls, v):
        """Accept codec names in any case."""
        if isinstance(v, str):
            return v.upper()
        return v

    @model_validator(mode='after')
    def check_input_given(self):
        """Require either an input path or an explicit file list."""
        if self.input_path is None and self.input_files is None:
            raise ValueError("either input_path or input_files must be set")
        return self


def build_config(**values: Any) -> MergeConfig:
    """
    Build a MergeConfig, reporting invalid values as ConfigError.

    Keys whose value is None are dropped so model defaults apply.

    Raises:
        ConfigError: If any value is invalid
    """
    try:
        return MergeConfig(**{k: v for k, v in values.items() if v is not None})
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


class MergeConfigLoader:
    """
    Loads merge settings from a YAML configuration file.
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the config loader.

        Args:
            config_path: Path to the YAML configuration file

        Raises:
            ConfigError: If the file does not exist
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

    def load_values(self) -> dict[str, Any]:
        """
        Read the `merge:` section as MergeConfig keyword arguments.

        Returns:
            Dictionary of MergeConfig field values

        Raises:
            ConfigError: If the YAML is invalid or has unknown keys
        """
        try:
            with open(self.config_path) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not config or "merge" not in config:
            raise ConfigError("Configuration file must contain 'merge' section")

        section = config["merge"] or {}
        unknown = sorted(set(section) - set(YAML_KEYS))
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        return {YAML_KEYS[key]: value for key, value in section.items()}

    def load(self, **overrides: Any) -> MergeConfig:
        """
        Load the configuration, letting non-None overrides win.

        Returns:
            MergeConfig instance
        """
        values = self.load_values()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return build_config(**values)
