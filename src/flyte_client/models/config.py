"""Configuration models for the Flyte API client."""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class RetryPolicy(BaseModel):
    """Backoff policy used while bootstrapping the API links."""

    model_config = ConfigDict(frozen=True)

    initial_interval: float = Field(
        default=1.0, description="Delay in seconds after the first failed attempt"
    )
    max_interval: float = Field(
        default=30.0, description="Upper bound for the delay between attempts"
    )
    multiplier: float = Field(
        default=2.0, description="Factor applied to the delay after each failure"
    )
    max_attempts: int | None = Field(
        default=None, description="Give up after this many attempts (None = retry forever)"
    )

    @field_validator("initial_interval", "max_interval")
    @classmethod
    def validate_interval(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Retry intervals must be positive")
        return v

    @field_validator("multiplier")
    @classmethod
    def validate_multiplier(cls, v: float) -> float:
        if v < 1:
            raise ValueError("Retry multiplier cannot be less than 1")
        return v

    @field_validator("max_attempts")
    @classmethod
    def validate_max_attempts(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError("max_attempts must be at least 1")
        return v

    @model_validator(mode="after")
    def validate_bounds(self) -> "RetryPolicy":
        if self.max_interval < self.initial_interval:
            raise ValueError("max_interval cannot be smaller than initial_interval")
        return self

    def delay(self, attempt: int) -> float:
        """Seconds to wait after the given (1-based) failed attempt."""
        if attempt < 1:
            attempt = 1
        try:
            delay = self.initial_interval * self.multiplier ** (attempt - 1)
        except OverflowError:
            return self.max_interval
        return min(delay, self.max_interval)


class ClientConfig(BaseModel):
    """Configuration for a FlyteClient."""

    model_config = ConfigDict(extra="ignore")

    base_url: str = Field(..., description="Root URL of the Flyte API")
    timeout_seconds: float = Field(
        default=10.0, description="Timeout applied to every network call"
    )
    action_method: str = Field(
        default="POST", description="HTTP method used when taking an action"
    )
    retry: RetryPolicy = Field(
        default_factory=RetryPolicy, description="Link bootstrap retry policy"
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("base_url cannot be empty")
        return v.strip().rstrip("/")

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout_seconds must be positive")
        return v

    @field_validator("action_method")
    @classmethod
    def validate_action_method(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("action_method cannot be empty")
        return v.strip().upper()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level
