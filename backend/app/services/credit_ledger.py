"""Redis-backed credit ledger and Stripe event claims."""

from datetime import UTC, datetime

from redis.asyncio import Redis

from app.core.config import get_settings

CREDIT_KINDS = ("evaluations", "blueprints")


def credits_key(user_id: str) -> str:
    return f"credits:{user_id}"


def event_key(event_id: str) -> str:
    return f"stripe:event:{event_id}"


class CreditLedger:
    """Per-user evaluation and blueprint credit balances.

    Balances live in one hash per user (``credits:{user_id}``) with a field
    per credit kind; grants use HINCRBY so concurrent webhooks never lose
    an increment.
    """

    def __init__(self, redis: Redis):
        self.redis = redis

    async def claim_event(self, event_id: str, ttl_seconds: int | None = None) -> bool:
        """Return True if the event is new (claimed). False if duplicate."""
        if ttl_seconds is None:
            ttl_seconds = get_settings().webhook_event_ttl_seconds
        claimed = await self.redis.set(
            event_key(event_id),
            datetime.now(UTC).isoformat(),
            nx=True,
            ex=ttl_seconds,
        )
        return bool(claimed)

    async def release_event(self, event_id: str) -> None:
        """Drop a claim so a failed delivery can be retried by Stripe."""
        await self.redis.delete(event_key(event_id))

    async def grant(self, user_id: str, evaluations: int = 0, blueprints: int = 0) -> dict[str, int]:
        """Add credits to a user's balance and return the new balance."""
        key = credits_key(user_id)
        async with self.redis.pipeline(transaction=True) as pipe:
            pipe.hincrby(key, "evaluations", evaluations)
            pipe.hincrby(key, "blueprints", blueprints)
            new_evaluations, new_blueprints = await pipe.execute()
        return {"evaluations": int(new_evaluations), "blueprints": int(new_blueprints)}

    async def balance(self, user_id: str) -> dict[str, int]:
        """Current balance; unknown users have zero of everything."""
        raw = await self.redis.hgetall(credits_key(user_id))
        return {kind: int(raw.get(kind, 0)) for kind in CREDIT_KINDS}
