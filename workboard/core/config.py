from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

from workboard.domain.scheduling.value_objects.timeline import TimelineConfig


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="WORKBOARD_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    PROJECT_NAME: str = "Work Order Scheduling Board"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["console", "json"] = "console"

    # Storage (stands in for browser local storage)
    STORAGE_BACKEND: Literal["memory", "file"] = "memory"
    STORAGE_DIR: Path = Path(".workboard")
    WORK_ORDERS_STORAGE_KEY: str = "workOrders"
    WORK_CENTERS_STORAGE_KEY: str = "workCenters"

    # Timeline geometry
    WEEK_START_DAY: int = Field(default=6, ge=0, le=6)  # datetime.weekday(); 6 = Sunday
    MIN_BAR_WIDTH: float = 100
    DAY_COLUMN_WIDTH: float = 80
    WEEK_COLUMN_WIDTH: float = 120
    MONTH_COLUMN_WIDTH: float = 150
    DAY_BUFFER_DAYS: int = 14
    WEEK_BUFFER_WEEKS: int = 4
    MONTH_BUFFER_MONTHS: int = 6

    # Form panel
    DEFAULT_ORDER_DURATION_DAYS: int = 7

    @computed_field  # type: ignore[prop-decorator]
    @property
    def timeline_config(self) -> TimelineConfig:
        return TimelineConfig(
            day_column_width=self.DAY_COLUMN_WIDTH,
            week_column_width=self.WEEK_COLUMN_WIDTH,
            month_column_width=self.MONTH_COLUMN_WIDTH,
            day_buffer_days=self.DAY_BUFFER_DAYS,
            week_buffer_weeks=self.WEEK_BUFFER_WEEKS,
            month_buffer_months=self.MONTH_BUFFER_MONTHS,
            min_bar_width=self.MIN_BAR_WIDTH,
            week_start_day=self.WEEK_START_DAY,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
