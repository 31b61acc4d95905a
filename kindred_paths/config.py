from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    # Card tag holding the name of the set a card was designed for.
    # Read by set repair (unlinked card report) and the "set:" search filter.
    set_tag_key: str = "set"


settings = Settings()


# =============================================================================
# TOKEN EXTRACTION LIMITS
# =============================================================================

# Extracted token descriptions are searched again for nested "create" phrases
# (a token whose ability creates another token), at most this deep
TOKEN_EXTRACTION_MAX_DEPTH = 2


# =============================================================================
# MATRIX KEY ALLOCATION
# =============================================================================

# New metadata/cycle keys get a numeric suffix when taken ("key_1", "key_2")
MAX_KEY_SUFFIX = 99
