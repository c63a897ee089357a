"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field

# Hard ceiling on seats at the table
MAX_SEATS = 10


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limiting configuration for the HTTP endpoints."""

    enabled: bool = field(default_factory=lambda: _env_flag("RATE_LIMIT_ENABLED", "true"))
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "60"))
    )


@dataclass(frozen=True)
class TableConfig:
    """Table rules and seating limits."""

    capacity: int = field(default_factory=lambda: int(os.getenv("TABLE_CAPACITY", str(MAX_SEATS))))
    min_players: int = 1
    num_decks: int = field(default_factory=lambda: int(os.getenv("SHOE_DECKS", "6")))
    default_bankroll: int = 100
    default_bet: int = 10
    max_bankroll: int = 1_000_000
    blackjack_payout: float = 1.5
    dealer_hits_soft_17: bool = field(
        default_factory=lambda: _env_flag("DEALER_HITS_SOFT_17", "false")
    )
    event_history_limit: int = field(
        default_factory=lambda: int(os.getenv("EVENT_HISTORY_LIMIT", "1000"))
    )

    def __post_init__(self) -> None:
        """Validate seating and wager limits."""
        if not 1 <= self.capacity <= MAX_SEATS:
            raise ValueError(f"capacity must be between 1 and {MAX_SEATS}")
        if not 1 <= self.min_players <= self.capacity:
            raise ValueError("min_players must be between 1 and capacity")
        if self.num_decks < 1:
            raise ValueError("num_decks must be at least 1")
        if self.max_bankroll < 1:
            raise ValueError("max_bankroll must be at least 1")
        if not 1 <= self.default_bankroll <= self.max_bankroll:
            raise ValueError("default_bankroll must be between 1 and max_bankroll")
        if not 1 <= self.default_bet <= self.default_bankroll:
            raise ValueError("default_bet must be between 1 and default_bankroll")
        if self.blackjack_payout < 1.0:
            raise ValueError("blackjack_payout must be at least 1.0")
        if self.event_history_limit < 1:
            raise ValueError("event_history_limit must be at least 1")


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: _env_flag("DEBUG", "false"))
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())

    table: TableConfig = field(default_factory=TableConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)


# Global configuration instance
config = AppConfig()
