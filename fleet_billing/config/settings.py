"""
Configuration management for the fleet billing engine.
"""

from decimal import Decimal
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fleet_billing.models.billing import BaseKmPolicy, BillingRules
from fleet_billing.models.salary import SalaryRules


class FleetBillingConfig(BaseSettings):
    """Configuration settings for the fleet billing engine.

    Every setting has a default, so the engine runs without any environment.
    """

    # Application Configuration
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Driver salary rates (company-wide)
    salary_base_salary: Decimal = Field(
        default=Decimal("20000"), ge=0, alias="SALARY_BASE_SALARY"
    )
    salary_base_days: int = Field(default=22, ge=1, alias="SALARY_BASE_DAYS")
    salary_extra_day_rate: Decimal = Field(
        default=Decimal("909"), ge=0, alias="SALARY_EXTRA_DAY_RATE"
    )
    salary_base_hours_per_day: Decimal = Field(
        default=Decimal("12"), ge=1, alias="SALARY_BASE_HOURS_PER_DAY"
    )
    salary_extra_hour_rate: Decimal = Field(
        default=Decimal("80"), ge=0, alias="SALARY_EXTRA_HOUR_RATE"
    )

    # Rate table substituted when a vehicle type has no billing rules
    billing_default_base_amount: Decimal = Field(
        default=Decimal("55000"), ge=0, alias="BILLING_DEFAULT_BASE_AMOUNT"
    )
    billing_default_base_days: int = Field(
        default=22, ge=1, alias="BILLING_DEFAULT_BASE_DAYS"
    )
    billing_default_extra_day_rate: Decimal = Field(
        default=Decimal("2500"), ge=0, alias="BILLING_DEFAULT_EXTRA_DAY_RATE"
    )
    billing_default_base_kms: int = Field(
        default=2000, ge=0, alias="BILLING_DEFAULT_BASE_KMS"
    )
    billing_default_extra_km_rate: Decimal = Field(
        default=Decimal("10"), ge=0, alias="BILLING_DEFAULT_EXTRA_KM_RATE"
    )
    billing_default_base_hours_per_day: Decimal = Field(
        default=Decimal("10"), ge=1, alias="BILLING_DEFAULT_BASE_HOURS_PER_DAY"
    )
    billing_default_extra_hour_rate: Decimal = Field(
        default=Decimal("100"), ge=0, alias="BILLING_DEFAULT_EXTRA_HOUR_RATE"
    )

    # Billing behaviour
    billing_base_km_policy: BaseKmPolicy = Field(
        default=BaseKmPolicy.FLAT, alias="BILLING_BASE_KM_POLICY"
    )
    billing_kms_per_working_day: int = Field(
        default=100, ge=0, alias="BILLING_KMS_PER_WORKING_DAY"
    )
    billing_extra_hours_threshold: Decimal = Field(
        default=Decimal("10"), ge=0, alias="BILLING_EXTRA_HOURS_THRESHOLD"
    )

    # Amount-in-words endings
    billing_words_suffix: str = Field(default="Only", alias="BILLING_WORDS_SUFFIX")
    salary_words_suffix: str = Field(
        default="Rupees Only", alias="SALARY_WORDS_SUFFIX"
    )

    # Document number prefixes
    tripsheet_prefix: str = Field(default="TS", alias="TRIPSHEET_PREFIX")
    bill_prefix: str = Field(default="BILL", alias="BILL_PREFIX")
    salary_prefix: str = Field(default="SAL", alias="SALARY_PREFIX")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Ensure environment is valid."""
        valid_envs = ["development", "testing", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of: {valid_envs}")
        return v.lower()

    @field_validator("billing_base_km_policy", mode="before")
    @classmethod
    def normalize_base_km_policy(cls, v):
        """Accept the policy name in any case, with dashes or underscores."""
        if isinstance(v, str):
            return v.strip().lower().replace("-", "_")
        return v

    def salary_rules(self) -> SalaryRules:
        """Get the configured driver salary rates."""
        return SalaryRules(
            base_salary=self.salary_base_salary,
            base_days=self.salary_base_days,
            extra_day_rate=self.salary_extra_day_rate,
            base_hours_per_day=self.salary_base_hours_per_day,
            extra_hour_rate=self.salary_extra_hour_rate,
        )

    def default_billing_rules(self) -> BillingRules:
        """Get the rate table used when a vehicle type has none."""
        return BillingRules(
            base_amount=self.billing_default_base_amount,
            base_days=self.billing_default_base_days,
            extra_day_rate=self.billing_default_extra_day_rate,
            base_kms=self.billing_default_base_kms,
            extra_km_rate=self.billing_default_extra_km_rate,
            base_hours_per_day=self.billing_default_base_hours_per_day,
            extra_hour_rate=self.billing_default_extra_hour_rate,
        )


def load_config(env_file: Optional[str] = None) -> FleetBillingConfig:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return FleetBillingConfig()


# Global configuration instance
_config: Optional[FleetBillingConfig] = None


def get_config() -> FleetBillingConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> FleetBillingConfig:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config
