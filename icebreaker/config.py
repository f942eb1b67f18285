from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="ICEBREAKER_")

    app_name: str = "IceBreaker"
    debug: bool = False

    data_dir: Path = Path(__file__).parent.parent / "data"

    netrunnerdb_url: str = "https://netrunnerdb.com/api/2.0/public"

    # Always legal in every alternate format
    core_set_name: str = "Revised Core Set"

    # Modded: core set + the newest cycle
    modded_cycles: int = 1

    # Cache Refresh: core set + newest cycles + these named expansions
    cache_refresh_cycles: int = 2
    cache_refresh_extra_sets: list[str] = ["Terminal Directive"]

    # Seasonal Cache Refresh variant, reported under its own key
    seasonal_format_key: str = "snapshot"
    seasonal_cycles: int = 2
    seasonal_extra_sets: list[str] = ["Terminal Directive", "Reign and Reverie"]
    seasonal_description: str = (
        "Snapshot: Cache Refresh with Reign and Reverie added to the card pool"
    )


settings = Settings()


# =============================================================================
# DECK CONSTRUCTION RULES
# =============================================================================

# Printed copy limit when a card does not carry its own
DEFAULT_CARD_LIMIT = 3

# Copies of a card shipped in a single product box
DEFAULT_PACK_QUANTITY = 3

# At most this many distinct restricted titles per deck
MAX_RESTRICTED_TITLES = 1

# Same-faction, non-alliance copies needed to waive a default alliance card
ALLIANCE_FACTION_THRESHOLD = 6

# Identities from this set are draft identities (no influence or copy limits)
DRAFT_SET_NAME = "Draft"
