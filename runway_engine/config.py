"""Configuration management using Pydantic Settings"""

from typing import Any, Tuple

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from runway_engine.domain.exceptions import InvalidConfigurationError


DEFAULT_FIXED_COST_KEYWORDS = (
    "SCHOOL,MORTGAGE,LEVIES,HOME LOAN,INSURANCE,BOND,INVESTMENT,LIFE,MEDICAL,NEDBHL,DISC PREM,"
    "NETFLIX,SPOTIFY,APPLE,GOOGLE,VODACOM,MTN,CELL C,TELKOM,ELECTRICITY,CITY OF,MUNICIPALITY,"
    "DISCOVERY,MULTICHOICE,DSTV,VUMATEL,AFRIHOST,MWEB,RAIN,OUTSURANCE,SANTAM,OLD MUTUAL,SANLAM,"
    "LIBERTY,ALLAN GRAY,CORONATION,RETIREMENT,PENSION,FIBRE,GYM,VIRGIN ACTIVE,PLANET FITNESS,"
    "AUDIBLE,AMAZON,CHATGPT,OPENAI"
)


def split_keywords(raw: str) -> Tuple[str, ...]:
    """Split a comma-separated keyword list, dropping blanks"""
    return tuple(k.strip().upper() for k in raw.split(",") if k.strip())


class EngineSettings(BaseSettings):
    """Engine thresholds and keyword tables, loaded from RUNWAY_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="RUNWAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Logging
    log_level: str = "WARNING"

    # Keyword tables (comma-separated, matched case-insensitively)
    salary_keywords: str = "TCP 131,TCP131,SALARY"
    fixed_cost_keywords: str = DEFAULT_FIXED_COST_KEYWORDS
    recurring_markers: str = "DEBIT ORDER,EFT,STOP ORDER,NAEDO,PAYMENT,INSTALMENT"
    scheduled_payment_categories: str = "TRANSFER,DEBIT ORDER,STOP ORDER,SCHEDULED PAYMENT"
    income_categories: str = "CREDIT,INCOME,SALARY"
    internal_transfer_markers: str = "INT-ACC,INTERNAL TRANSFER,SAVINGS TO,TO SAVINGS,PAID FROM,PAYED FROM"

    # Burn rate
    actuarial_alpha: float = Field(default=0.15, gt=0, lt=1)
    analysis_window_days: int = Field(default=90, gt=0)
    trend_sensitivity: float = Field(default=0.1, ge=0)

    # Salary detection and cycle bounds
    salary_fallback_threshold: float = Field(default=10_000.0, ge=0)
    salary_fallback_days: int = Field(default=45, gt=0)
    assumed_days_since_salary: int = Field(default=7, ge=0)
    fallback_previous_period_days: int = Field(default=30, gt=0)
    min_cycle_days: int = Field(default=20, gt=0)
    max_cycle_days: int = Field(default=45, gt=0)
    default_cycle_days: int = Field(default=30, gt=0)

    # Recurring classification
    min_recurring_occurrences: int = Field(default=1, ge=0)
    recent_occurrence_count: int = Field(default=3, gt=0)
    fixed_cost_amortization_days: int = Field(default=30, gt=0)

    # Category comparison
    pulse_baseline_threshold: float = Field(default=0.1, ge=0)
    hybrid_baseline_threshold: float = Field(default=0.1, ge=0)
    stability_percentage_threshold: float = Field(default=15.0, ge=0)
    stability_amount_threshold: float = Field(default=250.0, ge=0)
    category_analysis_limit: int = Field(default=5, gt=0)
    report_category_limit: int = Field(default=3, gt=0)

    # Risk model
    degrees_of_freedom: float = Field(default=4.0, gt=1)
    var_confidence_interval: float = Field(default=1.645, gt=0)

    # Subscription price creep
    subscription_lookback_days: int = Field(default=90, gt=0)
    subscription_recent_days: int = Field(default=1, ge=0)
    subscription_min_increase_pct: float = Field(default=0.5, ge=0)
    subscription_max_increase_pct: float = Field(default=25.0, gt=0)

    @model_validator(mode="after")
    def check_bounds(self) -> "EngineSettings":
        if self.min_cycle_days > self.max_cycle_days:
            raise ValueError(
                f"min_cycle_days ({self.min_cycle_days}) exceeds max_cycle_days ({self.max_cycle_days})"
            )
        if self.subscription_min_increase_pct >= self.subscription_max_increase_pct:
            raise ValueError("subscription_min_increase_pct must be below subscription_max_increase_pct")
        return self

    @property
    def salary_keyword_list(self) -> Tuple[str, ...]:
        return split_keywords(self.salary_keywords)

    @property
    def fixed_cost_keyword_list(self) -> Tuple[str, ...]:
        return split_keywords(self.fixed_cost_keywords)

    @property
    def recurring_marker_list(self) -> Tuple[str, ...]:
        return split_keywords(self.recurring_markers)

    @property
    def scheduled_payment_category_list(self) -> Tuple[str, ...]:
        return split_keywords(self.scheduled_payment_categories)

    @property
    def income_category_list(self) -> Tuple[str, ...]:
        return split_keywords(self.income_categories)

    @property
    def internal_transfer_marker_list(self) -> Tuple[str, ...]:
        return split_keywords(self.internal_transfer_markers)

    @property
    def clamped_default_cycle_days(self) -> int:
        """Default cycle length forced into [min_cycle_days, max_cycle_days]"""
        return min(max(self.default_cycle_days, self.min_cycle_days), self.max_cycle_days)


def load_settings(**overrides: Any) -> EngineSettings:
    """
    Build settings from environment plus explicit overrides.

    Raises:
        InvalidConfigurationError: If any value fails validation
    """
    try:
        return EngineSettings(**overrides)
    except ValidationError as e:
        raise InvalidConfigurationError(f"Invalid engine settings: {e}") from e
