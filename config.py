"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field

from calculator.strategy.rules import RuleSet, SurrenderRule


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limiting configuration."""

    enabled: bool = field(default_factory=lambda: _env_bool("RATE_LIMIT_ENABLED", "true"))
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "60"))
    )


@dataclass(frozen=True)
class StrategyConfig:
    """Default table rules and where strategy charts are read from."""

    num_decks: int = field(default_factory=lambda: int(os.getenv("STRATEGY_DECKS", "6")))
    dealer_hits_soft_17: bool = field(default_factory=lambda: _env_bool("STRATEGY_H17", "true"))
    double_after_split: bool = field(default_factory=lambda: _env_bool("STRATEGY_DAS", "true"))
    surrender: str = field(
        default_factory=lambda: os.getenv("STRATEGY_SURRENDER", SurrenderRule.NOT_ALLOWED.name)
    )
    charts_dir: str | None = field(default_factory=lambda: os.getenv("STRATEGY_CHARTS_DIR"))

    def __post_init__(self) -> None:
        # Reject invalid rules at load time
        self.rule_set()

    def rule_set(self) -> RuleSet:
        """Build the process-wide default rule set."""
        return RuleSet(
            num_decks=self.num_decks,
            dealer_hits_soft_17=self.dealer_hits_soft_17,
            double_after_split=self.double_after_split,
            surrender=SurrenderRule.from_string(self.surrender),
        )


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: _env_bool("DEBUG", "false"))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    strategy: StrategyConfig = field(default_factory=StrategyConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)


# Global configuration instance
config = AppConfig()
