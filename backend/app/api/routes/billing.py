"""Billing routes — pricing tiers, Stripe Checkout, webhooks, and credit balances."""

import stripe
import structlog
from fastapi import APIRouter, Depends, HTTPException, Request

from app.core.config import get_settings
from app.core.exceptions import BillingError
from app.db.redis import get_redis
from app.domain.pricing import PRICING_TIERS, PricingTier, format_amount, get_tier, get_tier_by_price_id
from app.schemas.evaluation import CamelModel
from app.services.credit_ledger import CreditLedger

logger = structlog.get_logger(__name__)

router = APIRouter()

ANONYMOUS_USER = "anonymous"


# ── Request / Response schemas ──────────────────────────────────────


class TierResponse(CamelModel):
    id: str
    name: str
    description: str
    price_cents: int
    display_price: str
    features: list[str]
    evaluation_credits: int
    blueprint_credits: int
    is_popular: bool


class CheckoutRequest(CamelModel):
    tier_id: str | None = None
    price_id: str | None = None
    user_id: str | None = None
    customer_email: str | None = None


class CheckoutResponse(CamelModel):
    checkout_url: str
    session_id: str


class CreditBalanceResponse(CamelModel):
    user_id: str
    evaluations: int
    blueprints: int


# ── Helpers ─────────────────────────────────────────────────────────


def _get_stripe() -> None:
    """Configure the stripe module with the secret key."""
    settings = get_settings()
    stripe.api_key = settings.stripe_secret_key


def _tier_response(tier: PricingTier) -> TierResponse:
    return TierResponse(
        id=tier.id,
        name=tier.name,
        description=tier.description,
        price_cents=tier.price_cents,
        display_price=format_amount(tier.price_cents),
        features=list(tier.features),
        evaluation_credits=tier.evaluation_credits,
        blueprint_credits=tier.blueprint_credits,
        is_popular=tier.is_popular,
    )


def _resolve_tier(body: CheckoutRequest) -> PricingTier:
    """Find the purchased tier from a tier id or a configured Stripe price id."""
    if body.tier_id:
        try:
            return get_tier(body.tier_id)
        except BillingError as e:
            raise HTTPException(status_code=400, detail=str(e))
    if body.price_id:
        tier = get_tier_by_price_id(body.price_id)
        if tier is None:
            raise HTTPException(status_code=400, detail="Invalid price ID")
        return tier
    raise HTTPException(status_code=400, detail="tierId or priceId is required")


def _line_item(tier: PricingTier) -> dict:
    """Configured Stripe price when available, inline price data otherwise."""
    if tier.price_id:
        return {"price": tier.price_id, "quantity": 1}
    return {
        "price_data": {
            "currency": "usd",
            "product_data": {"name": tier.name, "description": tier.description},
            "unit_amount": tier.price_cents,
        },
        "quantity": 1,
    }


def _parse_credit_count(value: object) -> int:
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


# ── Endpoints ───────────────────────────────────────────────────────


@router.get("/billing/tiers", response_model=list[TierResponse])
async def list_tiers():
    """Return every pricing tier, free tier first."""
    return [_tier_response(tier) for tier in PRICING_TIERS]


@router.post("/billing/checkout", response_model=CheckoutResponse)
async def create_checkout_session(body: CheckoutRequest):
    """Create a one-off Stripe Checkout session for a paid tier and return the URL."""
    tier = _resolve_tier(body)
    if tier.price_cents == 0:
        raise HTTPException(status_code=400, detail="The free tier does not require checkout")

    settings = get_settings()
    if not settings.stripe_secret_key:
        logger.error("stripe_secret_key_missing")
        raise HTTPException(status_code=503, detail="Stripe checkout is not configured")
    _get_stripe()

    checkout_session = await stripe.checkout.Session.create_async(
        mode="payment",
        line_items=[_line_item(tier)],
        success_url=f"{settings.frontend_url}/success?session_id={{CHECKOUT_SESSION_ID}}",
        cancel_url=f"{settings.frontend_url}/?cancelled=true",
        customer_email=body.customer_email or None,
        metadata={
            "tierId": tier.id,
            "userId": body.user_id or ANONYMOUS_USER,
            "evaluations": str(tier.evaluation_credits),
            "blueprints": str(tier.blueprint_credits),
        },
    )

    if not checkout_session.url:
        raise HTTPException(status_code=502, detail="Failed to create checkout session")

    logger.info("checkout_session_created", tier_id=tier.id, session_id=checkout_session.id)
    return CheckoutResponse(checkout_url=checkout_session.url, session_id=checkout_session.id)


@router.get("/billing/credits/{user_id}", response_model=CreditBalanceResponse)
async def get_credit_balance(user_id: str, redis=Depends(get_redis)):
    """Return the user's remaining evaluation and blueprint credits."""
    balance = await CreditLedger(redis).balance(user_id)
    return CreditBalanceResponse(user_id=user_id, **balance)


@router.post("/webhooks/stripe")
async def stripe_webhook(request: Request, redis=Depends(get_redis)):
    """Handle Stripe webhook events with signature verification."""
    settings = get_settings()
    if not settings.stripe_webhook_secret:
        logger.error("stripe_webhook_secret_missing")
        raise HTTPException(status_code=503, detail="Stripe webhook endpoint is not configured")
    _get_stripe()

    body = await request.body()
    sig_header = request.headers.get("stripe-signature")

    if not sig_header:
        raise HTTPException(status_code=400, detail="Missing stripe-signature header")

    try:
        event = stripe.Webhook.construct_event(body, sig_header, settings.stripe_webhook_secret)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid payload")
    except stripe.SignatureVerificationError:
        raise HTTPException(status_code=400, detail="Invalid signature")

    ledger = CreditLedger(redis)
    if not await ledger.claim_event(event["id"]):
        logger.info("stripe_duplicate_event_ignored", event_id=event["id"])
        return {"received": True, "skipped": True}

    event_type = event["type"]
    data = event["data"]["object"]

    logger.info("stripe_webhook_received", event_type=event_type, event_id=event["id"])

    try:
        if event_type == "checkout.session.completed":
            await _handle_checkout_completed(ledger, data)
        elif event_type == "payment_intent.payment_failed":
            logger.warning("stripe_payment_failed", payment_intent_id=data.get("id"))
        else:
            logger.info("stripe_event_unhandled", event_type=event_type)
    except Exception:
        # Release the claim so Stripe's retry is processed
        await ledger.release_event(event["id"])
        raise

    return {"received": True, "processed": True}


# ── Webhook handlers ────────────────────────────────────────────────


async def _handle_checkout_completed(ledger: CreditLedger, session_data: dict) -> None:
    """Grant the purchased credits to the buyer's ledger."""
    metadata = session_data.get("metadata") or {}
    user_id = metadata.get("userId")
    tier_id = metadata.get("tierId")

    if not user_id or user_id == ANONYMOUS_USER:
        logger.info("checkout_completed_anonymous", session_id=session_data.get("id"), tier_id=tier_id)
        return

    evaluations = _parse_credit_count(metadata.get("evaluations"))
    blueprints = _parse_credit_count(metadata.get("blueprints"))

    balance = await ledger.grant(user_id, evaluations=evaluations, blueprints=blueprints)
    logger.info(
        "credits_granted",
        user_id=user_id,
        tier_id=tier_id,
        evaluations=evaluations,
        blueprints=blueprints,
        amount_total=session_data.get("amount_total"),
        balance=balance,
    )
