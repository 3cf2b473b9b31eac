"""Constants for the ranker module."""

# Scheme used when an entry has no URL from the primary source
SYNTHESIZED_URL_SCHEME: str = "https://"

# Tier positions in the composite sort key
TIER_LOCAL_MARKET: int = 0
TIER_PRIMARY_ONLY: int = 1

# Sort position of an entry missing the primary rank
MISSING_RANK: float = float("inf")
