# paintdesk/config.py
import os
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from paintdesk.estimating.hours import ProductivityRates
from paintdesk.estimating.paint import LinearCoverage
from paintdesk.estimating.summary import EstimateConfig


class Settings(BaseSettings):
    # === App ===
    app_env: str = "local"  # local | development | production
    service_name: str = "paintdesk-api"

    # === Logging ===
    log_level: str = "INFO"

    # === Paint & labor ===
    coverage_ft_per_gallon: float = Field(400.0, gt=0, description="Feet (or sq ft) one gallon covers per coat")
    wall_speed: float = Field(150.0, description="Wall sq ft per labor hour per coat")
    ceiling_speed: float = Field(120.0, description="Ceiling sq ft per labor hour per coat")
    trim_speed: float = Field(50.0, description="Trim linear ft per labor hour per coat")
    efficiency: float = 1.0
    hours_per_day: float = 8.0
    default_coats: int = 1

    # === Money ===
    tax_rate: float = 0.0825
    profit_margin: float = 0.20
    payment_fee_rate: float = 0.03
    payment_fee_fixed: float = 2.0
    cost_per_gallon: float = 65.0
    hour_rate: float = 40.0
    drywall_tax_rate: float = 0.0825
    painting_tax_rate: float = 0.0

    # === Production rate estimates ===
    production_labor_rate: float = 45.0
    overhead_percent: float = 15.0
    production_profit_percent: float = 50.0

    # === Metrics ===
    metrics_enabled: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    def estimate_config(self) -> EstimateConfig:
        return EstimateConfig(
            coverage=LinearCoverage(self.coverage_ft_per_gallon),
            rates=ProductivityRates(
                wall_speed=self.wall_speed,
                ceiling_speed=self.ceiling_speed,
                trim_speed=self.trim_speed,
            ),
            efficiency=self.efficiency,
            hours_per_day=self.hours_per_day,
            default_coats=self.default_coats,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Singleton Settings instance with simple env overrides."""
    s = Settings()

    env = os.getenv("ENVIRONMENT", s.app_env).lower()
    if env == "production":
        s.log_level = "WARNING"
    elif env == "development":
        s.log_level = "DEBUG"

    return s


# from paintdesk.config import settings
settings = get_settings()
