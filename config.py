"""Configuration management with environment variable support."""

import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation


def _parse_player_names() -> tuple[str, ...]:
    """Parse BLACKJACK_PLAYERS environment variable."""
    names = os.getenv("BLACKJACK_PLAYERS", "Nick")
    parsed = tuple(n.strip() for n in names.split(",") if n.strip())
    return parsed or ("Nick",)


def _parse_starting_bank() -> Decimal:
    """Parse BLACKJACK_STARTING_BANK environment variable."""
    raw = os.getenv("BLACKJACK_STARTING_BANK", "100.0")
    try:
        return Decimal(raw.strip())
    except InvalidOperation:
        raise ValueError(f"BLACKJACK_STARTING_BANK is not a number: {raw!r}") from None


def _parse_seed() -> int | None:
    """Parse BLACKJACK_SEED environment variable."""
    raw = os.getenv("BLACKJACK_SEED")
    if raw is None or not raw.strip():
        return None
    return int(raw)


@dataclass(frozen=True)
class TableConfig:
    """Table configuration."""

    player_names: tuple[str, ...] = field(default_factory=_parse_player_names)
    starting_bank: Decimal = field(default_factory=_parse_starting_bank)
    seed: int | None = field(default_factory=_parse_seed)
    log_level: str = field(
        default_factory=lambda: os.getenv("BLACKJACK_LOG_LEVEL", "WARNING").upper()
    )


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    table: TableConfig = field(default_factory=TableConfig)


# Global configuration instance
config = AppConfig()
