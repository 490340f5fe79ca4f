"""
Dashboard configuration.

Settings load from a YAML file and can be overridden through environment
variables. Expected YAML format:

```yaml
columns:
  country: Country
  industry: Industry
  year: Year
  regulation_status: Regulation Status
  top_tools: Top AI Tools Used

metrics:
  - AI Adoption Rate (%)
  - Job Loss Due to AI (%)

defaults:
  metric: AI Adoption Rate (%)
  group_by: Industry
  cross_tab_by: Regulation Status
  country: All
  max_year: 2025

coercion_policy: eager
```
"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from adoption_dashboard.core.coercion import CoercionPolicy
from adoption_dashboard.core.errors import ConfigError
from adoption_dashboard.core.models import ALL_COUNTRIES, AggregationRequest, FilterParams


CONFIG_PATH_ENV = "DASHBOARD_CONFIG"

DEFAULT_METRICS = [
    "AI Adoption Rate (%)",
    "AI-Generated Content Volume (TBs per year)",
    "Job Loss Due to AI (%)",
    "Revenue Increase Due to AI (%)",
    "Human-AI Collaboration Rate (%)",
    "Consumer Trust in AI (%)",
    "Market Share of AI Companies (%)",
]

# Environment variable -> (section, key); section None means top level
ENV_OVERRIDES = {
    "DASHBOARD_COERCION_POLICY": (None, "coercion_policy"),
    "DASHBOARD_DEFAULT_METRIC": ("defaults", "metric"),
    "DASHBOARD_DEFAULT_GROUP_BY": ("defaults", "group_by"),
    "DASHBOARD_DEFAULT_COUNTRY": ("defaults", "country"),
    "DASHBOARD_MAX_YEAR": ("defaults", "max_year"),
}


class ColumnSettings(BaseModel):
    """Names of the columns the dashboard reads."""

    model_config = ConfigDict(frozen=True)

    country: str = "Country"
    industry: str = "Industry"
    year: str = "Year"
    regulation_status: str = "Regulation Status"
    top_tools: str = "Top AI Tools Used"


class DefaultSelection(BaseModel):
    """Initial state of the filter and selection controls."""

    model_config = ConfigDict(frozen=True)

    metric: str = DEFAULT_METRICS[0]
    group_by: str = "Industry"
    cross_tab_by: str = "Regulation Status"
    country: str = ALL_COUNTRIES
    max_year: int = 2025


class DashboardSettings(BaseModel):
    """
    Complete dashboard configuration.

    Attributes:
        columns: Column names for country, industry, year and categories
        metrics: Metric columns offered in the metric selector
        defaults: Initial selection
        coercion_policy: When numeric columns are coerced
        category_separator: Separator inside multi-valued category cells
    """

    model_config = ConfigDict(frozen=True)

    columns: ColumnSettings = Field(default_factory=ColumnSettings)
    metrics: list[str] = Field(default_factory=lambda: list(DEFAULT_METRICS), min_length=1)
    defaults: DefaultSelection = Field(default_factory=DefaultSelection)
    coercion_policy: CoercionPolicy = CoercionPolicy.EAGER
    category_separator: str = Field(",", min_length=1)

    @model_validator(mode="after")
    def check_default_metric(self) -> "DashboardSettings":
        if self.defaults.metric not in self.metrics:
            raise ValueError(f"default metric '{self.defaults.metric}' is not one of the configured metrics")
        return self

    def default_request(self) -> AggregationRequest:
        """Selection the dashboard starts with."""
        return AggregationRequest(
            metric=self.defaults.metric,
            group_by=self.defaults.group_by,
            cross_tab_by=self.defaults.cross_tab_by,
            filters=FilterParams(country=self.defaults.country, max_year=self.defaults.max_year),
        )


class SettingsLoader:
    """
    Loads DashboardSettings from YAML plus environment overrides.
    """

    def __init__(self, config_path: str | Path | None = None):
        """
        Initialize the settings loader.

        Args:
            config_path: YAML file; falls back to $DASHBOARD_CONFIG, then to
                built-in defaults when neither is set
        """
        path = config_path or os.getenv(CONFIG_PATH_ENV)
        self.config_path = Path(path) if path else None
        if self.config_path is not None and not self.config_path.exists():
            raise ConfigError(f"Configuration file not found: {self.config_path}")

    def load(self) -> DashboardSettings:
        """
        Build settings.

        Raises:
            ConfigError: If the YAML is malformed or fails validation
        """
        raw = self._read_yaml() if self.config_path else {}
        self._apply_env_overrides(raw)

        try:
            return DashboardSettings.model_validate(raw)
        except ValidationError as e:
            raise ConfigError(f"Invalid dashboard configuration: {e}") from e

    def _read_yaml(self) -> dict[str, Any]:
        try:
            with open(self.config_path) as f:
                config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Configuration file is not valid YAML: {e}") from e

        if config is None:
            return {}
        if not isinstance(config, dict):
            raise ConfigError("Configuration file must contain a mapping at the top level")
        return config

    def _apply_env_overrides(self, raw: dict[str, Any]) -> None:
        for env_name, (section, key) in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value is None or value == "":
                continue
            target = raw if section is None else raw.setdefault(section, {})
            if not isinstance(target, dict):
                raise ConfigError(f"Configuration section '{section}' must be a mapping")
            target[key] = value


def load_settings(config_path: str | Path | None = None) -> DashboardSettings:
    """Load settings from ``config_path`` (or $DASHBOARD_CONFIG) and the environment."""
    return SettingsLoader(config_path).load()
