"""Configuration management for the hellobooks end-to-end suite."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_BASE_URL = "https://dev.hellobooks.ai"

# Playwright's "Desktop Chrome" device descriptor
DESKTOP_CHROME_VIEWPORT = (1280, 720)

TRACE_MODES = ("off", "on", "retain-on-failure")
REPORT_FORMATS = ("json", "html")


class Settings(BaseSettings):
    """Suite settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Target application
    base_url: str = Field(
        default=DEFAULT_BASE_URL, description="Application origin under test"
    )
    login_email: str = Field(default="", description="Seed account email")
    login_password: str = Field(default="", description="Seed account password")

    # Browser Configuration
    browser_headless: bool = Field(
        default=True, description="Run browser in headless mode"
    )
    browser_viewport_width: int = Field(
        default=DESKTOP_CHROME_VIEWPORT[0], ge=320, description="Browser viewport width"
    )
    browser_viewport_height: int = Field(
        default=DESKTOP_CHROME_VIEWPORT[1], ge=240, description="Browser viewport height"
    )
    browser_slow_mo_ms: int = Field(
        default=0, ge=0, description="Delay inserted between browser operations (ms)"
    )

    # Timeouts
    action_timeout_ms: int = Field(
        default=3 * 60 * 1000, ge=1000, description="Default action timeout (ms)"
    )
    navigation_timeout_ms: int = Field(
        default=3 * 60 * 1000, ge=1000, description="Default navigation timeout (ms)"
    )
    expect_timeout_ms: int = Field(
        default=3 * 60 * 1000, ge=1000, description="Strict assertion timeout (ms)"
    )
    test_timeout_seconds: int = Field(
        default=5 * 60, ge=1, description="Per-test timeout (s)"
    )

    # Soft-fail helper timeouts
    optional_action_timeout_ms: int = Field(default=5000, ge=0)
    safe_expect_timeout_ms: int = Field(default=5000, ge=0)
    field_timeout_ms: int = Field(default=10000, ge=0)
    toast_timeout_ms: int = Field(default=10000, ge=0)
    route_timeout_ms: int = Field(default=15000, ge=0)
    dropdown_settle_ms: int = Field(default=500, ge=0)

    # Execution Configuration
    ci: bool = Field(default=False, description="Running on a CI system")
    retries: Optional[int] = Field(
        default=None, ge=0, description="Retries for failed tests (None: 1 on CI, else 0)"
    )
    screenshot_on_failure: bool = Field(
        default=True, description="Capture a screenshot when a test fails"
    )
    trace_mode: str = Field(
        default="retain-on-failure", description="Playwright tracing mode"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="text", description="Log format (json or text)")
    log_file: Optional[str] = Field(default=None, description="Log file path")
    sanitize_logs: bool = Field(
        default=True, description="Redact credentials and PII in logs"
    )

    # Storage Configuration
    reports_dir: Path = Field(
        default=Path("reports"), description="Reports output directory"
    )
    screenshots_dir: Path = Field(
        default=Path("reports/screenshots"), description="Failure screenshots"
    )
    traces_dir: Path = Field(
        default=Path("reports/traces"), description="Playwright trace archives"
    )
    report_format: Optional[str] = Field(
        default=None, description="Run report format (None: json on CI, else html)"
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the origin so paths can be appended."""
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        if v not in ["json", "text"]:
            raise ValueError(f"Invalid log format: {v}")
        return v

    @field_validator("trace_mode")
    @classmethod
    def validate_trace_mode(cls, v: str) -> str:
        if v not in TRACE_MODES:
            raise ValueError(
                f"Invalid trace mode: {v}. Allowed values: {list(TRACE_MODES)}"
            )
        return v

    @field_validator("report_format")
    @classmethod
    def validate_report_format(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in REPORT_FORMATS:
            raise ValueError(f"Invalid report format: {v}")
        return v

    @property
    def effective_retries(self) -> int:
        """Retry count after applying the CI default."""
        if self.retries is not None:
            return self.retries
        return 1 if self.ci else 0

    @property
    def effective_report_format(self) -> str:
        """Report format after applying the CI default."""
        if self.report_format:
            return self.report_format
        return "json" if self.ci else "html"

    @property
    def has_credentials(self) -> bool:
        return bool(self.login_email and self.login_password)

    def url_for(self, path: str = "") -> str:
        """Join a route onto the configured origin."""
        if not path:
            return self.base_url
        return f"{self.base_url}/{path.lstrip('/')}"

    def create_directories(self) -> None:
        """Create required directories if they don't exist."""
        for dir_path in [self.reports_dir, self.screenshots_dir, self.traces_dir]:
            dir_path.mkdir(parents=True, exist_ok=True)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    # Load .env file if it exists
    env_file = Path(".env")
    if env_file.exists():
        load_dotenv(env_file)

    settings = Settings()
    settings.create_directories()
    return settings
