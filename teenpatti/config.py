"""Application configuration."""
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Table settings
    starting_chips: int = int(os.getenv("TP_STARTING_CHIPS", "1000"))
    boot_amount: int = int(os.getenv("TP_BOOT_AMOUNT", "5"))
    bot_count: int = int(os.getenv("TP_BOT_COUNT", "2"))
    human_name: str = os.getenv("TP_HUMAN_NAME", "You")

    # Bot "thinking" delay range, seconds
    bot_think_min: float = float(os.getenv("TP_BOT_THINK_MIN", "0.9"))
    bot_think_max: float = float(os.getenv("TP_BOT_THINK_MAX", "1.5"))

    # Server
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def think_range(self):
        return (self.bot_think_min, self.bot_think_max)


config = Config()
