"""
Configuration for League Engine.

Centralizes data source, side-channel storage and HTTP settings.
"""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


@dataclass
class Config:
    """Configuration container for League Engine."""

    # ==========================================================================
    # DATA SOURCE
    # ==========================================================================

    # JSON file path or http(s) URL holding {"teams": [...], "matches": [...]}
    data_source: str = field(
        default_factory=lambda: os.getenv("LEAGUE_DATA_SOURCE", "data/teams.json")
    )

    # ==========================================================================
    # KEY-VALUE SIDE CHANNEL
    # ==========================================================================

    store_path: str = field(
        default_factory=lambda: os.getenv(
            "LEAGUE_STORE_PATH",
            os.path.join(os.path.expanduser("~"), ".league_engine", "store.json"),
        )
    )

    # Key holding the favorite team id as a base-10 string
    favorite_key: str = "favoriteTeamId"

    # ==========================================================================
    # HTTP
    # ==========================================================================

    req_timeout_s: float = field(
        default_factory=lambda: float(os.getenv("REQ_TIMEOUT_S", "10"))
    )
    retries: int = field(default_factory=lambda: int(os.getenv("RETRIES", "3")))
    user_agent: str = field(
        default_factory=lambda: os.getenv("USER_AGENT", "league-engine/1.0")
    )


# Global default config instance
DEFAULT_CONFIG = Config()
