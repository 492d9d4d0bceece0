class ProfitPulseError(Exception):
    """Base exception for Profit Pulse application."""

    pass


class ExportError(ProfitPulseError):
    """Raised when an evaluation cannot be exported in the requested format."""

    pass


class AIProviderError(ProfitPulseError):
    """Raised when the LLM provider call fails or returns unusable output."""

    pass


class BillingError(ProfitPulseError):
    """Raised for unknown pricing tiers or Stripe price ids."""

    def __init__(self, message: str, tier_id: str | None = None):
        self.tier_id = tier_id
        super().__init__(message)
