"""Settings for human-readable validation reports.

Settings can be built directly, from a dictionary, or from a YAML file:

    ```yaml
    validation:
      report:
        max_value_length: 80
        max_errors_to_list: 5
    ```

    ```python
    from dataknobs_validation.settings import load_report_settings

    settings = load_report_settings("config/validation.yaml")
    print(result.detailed(settings))
    ```
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from .exceptions import ValidationSettingsError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportSettings:
    """Truncation limits for validation reports.

    Attributes:
        max_value_length: Longest value representation printed before truncating.
        max_errors_to_list: Number of expectations listed before summarizing the rest.
        ellipsis: Marker appended to truncated value representations.
    """

    max_value_length: int = 120
    max_errors_to_list: int = 20
    ellipsis: str = "…"

    def __post_init__(self) -> None:
        if not isinstance(self.max_value_length, int) or self.max_value_length < 1:
            raise ValidationSettingsError(
                "max_value_length must be a positive integer",
                setting="max_value_length",
                value=self.max_value_length,
            )
        if not isinstance(self.max_errors_to_list, int) or self.max_errors_to_list < 0:
            raise ValidationSettingsError(
                "max_errors_to_list must be a non-negative integer",
                setting="max_errors_to_list",
                value=self.max_errors_to_list,
            )
        if not isinstance(self.ellipsis, str):
            raise ValidationSettingsError(
                "ellipsis must be a string", setting="ellipsis", value=self.ellipsis
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ReportSettings:
        """Create settings from a dictionary, ignoring unknown keys.

        Args:
            data: Settings dictionary, may be empty or None

        Returns:
            ReportSettings with defaults for missing keys
        """
        if not data:
            return cls()
        if not isinstance(data, dict):
            raise ValidationSettingsError(
                f"Report settings must be a mapping, got {type(data).__name__}"
            )
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in data if key not in known)
        if unknown:
            logger.warning("Ignoring unknown report settings: %s", ", ".join(unknown))
        return cls(**{key: value for key, value in data.items() if key in known})

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


DEFAULT_REPORT_SETTINGS = ReportSettings()


def load_report_settings(path: str | Path) -> ReportSettings:
    """Load report settings from a YAML file.

    The settings may sit at the top level of the document or be nested under
    ``validation.report``.

    Args:
        path: Path to a ``.yaml``/``.yml`` file

    Returns:
        Loaded ReportSettings

    Raises:
        ValidationSettingsError: If the file is missing, unreadable or malformed
    """
    path = Path(path)
    if not path.exists():
        raise ValidationSettingsError(f"Settings file not found: {path}")
    if path.suffix.lower() not in (".yaml", ".yml"):
        raise ValidationSettingsError(f"Unsupported settings file format: {path.suffix}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValidationSettingsError(f"Invalid YAML in {path}: {e}") from e

    if isinstance(data, dict) and isinstance(data.get("validation"), dict):
        data = data["validation"].get("report", {})

    logger.debug("Loaded report settings from %s", path)
    return ReportSettings.from_dict(data)
