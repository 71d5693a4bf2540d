"""Application configuration for the reel engine, wallet and host service."""
from pydantic import ConfigDict
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Machine settings, overridable via REELSPIN_* environment variables."""

    model_config = ConfigDict(env_prefix="REELSPIN_")

    # Server
    debug: bool = False
    redis_url: str = "redis://localhost:6379/0"
    use_redis: bool = False

    # Protocol
    protocol_version: str = "1.0"

    # Wallet
    balance_key: str = "balance"
    default_balance: int = 50000
    available_amounts: list[int] = [5, 10, 25, 50, 100, 500, 1000]
    initial_bet: int | None = None  # None selects the smallest denomination

    # Geometry
    column_options: list[int] = [3, 4, 5, 6]
    row_options: list[int] = [3, 4, 5, 6]
    default_columns: int = 5
    default_rows: int = 5

    # Strip
    symbols: list[str] = [
        "cherry",
        "lemon",
        "orange",
        "plum",
        "banana",
        "bars",
        "bigwin",
        "seven",
        "watermelon",
    ]

    # Motion
    spin_duration_seconds: float = 1.0
    spin_speed: float = 600.0  # position units per second (10 per frame at 60 fps)
    symbol_height: float | None = None  # None derives it from the layout
    frame_rate: int = 60

    # Layout (machine surface in pixels)
    machine_width: float = 800.0
    machine_height: float = 600.0
    border_width: float = 2.0


settings = Settings()
