"""
Immutable selection parameters handed to the filter pipeline and aggregator.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


ALL_COUNTRIES = "All"
NO_YEAR_CEILING = 9999


class FilterParams(BaseModel):
    """
    Which records a view covers.

    Attributes:
        country: Exact Country value to keep, or "All"
        max_year: Inclusive upper bound on Year
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "country": "USA",
                "max_year": 2023,
            }
        },
    )

    country: str = ALL_COUNTRIES
    max_year: int = NO_YEAR_CEILING

    @field_validator("country")
    @classmethod
    def strip_country(cls, v: str) -> str:
        return v.strip()

    @property
    def all_countries(self) -> bool:
        return self.country == ALL_COUNTRIES


class AggregationRequest(BaseModel):
    """
    Everything an aggregation needs besides the data.

    Attributes:
        metric: Numeric column averaged or summed
        group_by: Categorical column the line series are split by
        cross_tab_by: Column the bar chart splits each industry's count by
        filters: Country and year filters applied first
    """

    model_config = ConfigDict(frozen=True)

    metric: str = Field(..., min_length=1)
    group_by: str = Field("Industry", min_length=1)
    cross_tab_by: str = Field("Regulation Status", min_length=1)
    filters: FilterParams = Field(default_factory=FilterParams)
