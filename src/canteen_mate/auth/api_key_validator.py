"""API key validation for staff endpoints.

Staff endpoints (contact inbox, kitchen status updates) are protected by a
configured set of API keys sent in the X-API-Key header.
"""

import hmac


class APIKeyValidator:
    """Validates staff API keys against the configured set."""

    def __init__(self, api_keys: list[str]) -> None:
        """Initialize validator with list of valid API keys.

        Args:
            api_keys: List of valid API key strings

        Raises:
            ValueError: If api_keys list is empty
        """
        if not api_keys:
            raise ValueError("At least one API key must be provided")

        self.api_keys = frozenset(api_keys)

    def validate(self, api_key: str) -> bool:
        """Check api_key against every configured key in constant time per key."""
        return any(hmac.compare_digest(api_key, valid_key) for valid_key in self.api_keys)
