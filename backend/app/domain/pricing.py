"""Pricing tiers and the evaluation credits each purchase grants.

Stripe price ids come from settings; everything else is static.
"""

from dataclasses import dataclass

from app.core.config import get_settings
from app.core.exceptions import BillingError


@dataclass(frozen=True)
class PricingTier:
    id: str
    name: str
    description: str
    price_cents: int
    features: tuple[str, ...]
    evaluation_credits: int = 0
    blueprint_credits: int = 0
    is_popular: bool = False
    price_setting: str | None = None  # Settings attribute holding the Stripe price id

    @property
    def price_id(self) -> str | None:
        if self.price_setting is None:
            return None
        return getattr(get_settings(), self.price_setting) or None


PRICING_TIERS: tuple[PricingTier, ...] = (
    PricingTier(
        id="free",
        name="Free QPV",
        description="Quick evaluation of any idea",
        price_cents=0,
        features=(
            "Weighted QPV score (0-10)",
            "Instant interpretation",
            "No signup required",
        ),
    ),
    PricingTier(
        id="starter",
        name="Starter",
        description="Full Evaluation + Blueprint",
        price_cents=900,
        features=(
            "1 Full Evaluation",
            "1 Execution Blueprint",
            "4-layer scoring (30+ data points)",
            "Failure mode analysis",
            "Export to PDF/Markdown",
        ),
        evaluation_credits=1,
        blueprint_credits=1,
        price_setting="stripe_price_starter",
    ),
    PricingTier(
        id="explorer",
        name="Explorer",
        description="For Serious Validators",
        price_cents=2900,
        features=(
            "5 Full Evaluations",
            "2 Execution Blueprints",
            "Compare ideas side-by-side",
            "Export to Notion",
            "Save $16 vs separate",
        ),
        evaluation_credits=5,
        blueprint_credits=2,
        is_popular=True,
        price_setting="stripe_price_explorer",
    ),
)


def get_tier(tier_id: str) -> PricingTier:
    """Return the tier with the given id.

    Raises:
        BillingError: If no tier has this id
    """
    for tier in PRICING_TIERS:
        if tier.id == tier_id:
            return tier
    raise BillingError(f"Unknown pricing tier: {tier_id}", tier_id=tier_id)


def get_tier_by_price_id(price_id: str) -> PricingTier | None:
    """Reverse lookup from a configured Stripe price id. Free tier never matches."""
    if not price_id:
        return None
    for tier in PRICING_TIERS:
        if tier.price_id == price_id:
            return tier
    return None


def format_amount(amount_cents: int, currency: str = "usd") -> str:
    """Format cents for display, e.g. 2900 -> "$29.00"."""
    symbol = "$" if currency.lower() == "usd" else f"{currency.upper()} "
    return f"{symbol}{amount_cents / 100:,.2f}"
