"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at load time using Pydantic.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from people_directory.domain.entities import GroupingCriterion


class ApiConfig(BaseModel):
    """Upstream record source settings."""

    base_url: str = Field(default="https://randomuser.me/api/")
    seed: str = Field(default="awork", min_length=1)
    timeout_seconds: float = Field(default=30.0, gt=0)
    user_agent: str = Field(default="people-directory/0.1")


class PaginationConfig(BaseModel):
    """Paged acquisition settings."""

    page_size: int = Field(default=5000, ge=1, le=5000)


class SearchConfig(BaseModel):
    """Search input settings."""

    debounce_seconds: float = Field(default=0.3, ge=0)


class GroupingConfig(BaseModel):
    """Grouping settings."""

    backend: Literal["auto", "process", "inline"] = "auto"
    default_criterion: GroupingCriterion = GroupingCriterion.ALPHABETICAL
    discard_stale_results: bool = False


class AutoContinuationConfig(BaseModel):
    """Follow-up loading when the first load came back small."""

    enabled: bool = True
    low_water_mark: int = Field(default=1000, ge=1)
    target_total: int = Field(default=5000, ge=1)
    initial_delay_seconds: float = Field(default=3.0, ge=0)
    step_delay_seconds: float = Field(default=1.0, ge=0)
    follow_up_delay_seconds: float = Field(default=2.0, ge=0)


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    use_json: bool = True


class DirectoryConfig(BaseModel):
    """Root configuration object."""

    version: str = "1.0"
    api: ApiConfig = Field(default_factory=ApiConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    grouping: GroupingConfig = Field(default_factory=GroupingConfig)
    auto_continuation: AutoContinuationConfig = Field(
        default_factory=AutoContinuationConfig,
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def check_auto_continuation(self) -> "DirectoryConfig":
        if self.auto_continuation.low_water_mark > self.auto_continuation.target_total:
            raise ValueError("auto_continuation.low_water_mark must not exceed target_total")
        return self
