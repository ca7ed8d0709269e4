"""
usage_service.py — Subscription tiers, monthly usage and entitlements

Business Rules:
- free: 10 generations / 3 edits per month; explorer and pro: unlimited (-1)
- Unknown or missing tier is treated as free
- Counters reset when last_reset_date falls in an earlier calendar month (UTC)
- The admin privilege grant is a fixed "pro" payload with effectively no limits

Called by: routers/users.py, routers/admin.py
"""

from datetime import datetime, timezone

UNLIMITED = -1

TIER_LIMITS = {
    "free": (10, 3),
    "explorer": (UNLIMITED, UNLIMITED),
    "pro": (UNLIMITED, UNLIMITED),
}

PRO_SUBSCRIPTION_END = "2099-12-31T23:59:59Z"
PRO_USAGE_LIMIT = 999999


def parse_timestamp(value) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        ts = value
    else:
        try:
            ts = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError:
            return None
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts


def needs_monthly_reset(last_reset, now: datetime) -> bool:
    ts = parse_timestamp(last_reset)
    if ts is None:
        return False
    ts = ts.astimezone(timezone.utc)
    return (ts.year, ts.month) != (now.year, now.month)


def usage_summary(profile: dict, now: datetime) -> tuple[dict, bool]:
    """Return the usage-stats body for a profile and whether counters must reset."""
    tier = profile.get("membership_tier") or "free"
    generations_limit, edits_limit = TIER_LIMITS.get(tier, TIER_LIMITS["free"])

    reset = needs_monthly_reset(profile.get("last_reset_date"), now)
    generations = 0 if reset else (profile.get("monthly_generations") or 0)
    edits = 0 if reset else (profile.get("monthly_edits") or 0)

    return {
        "membership_tier": tier,
        "generations": {
            "used": generations,
            "limit": generations_limit,
            "unlimited": generations_limit == UNLIMITED,
        },
        "edits": {
            "used": edits,
            "limit": edits_limit,
            "unlimited": edits_limit == UNLIMITED,
        },
        "last_reset": profile.get("last_reset_date"),
    }, reset


def pro_entitlements(user_id, now: datetime) -> dict:
    """Profile upsert payload granting the pro tier."""
    return {
        "id": user_id,
        "membership_tier": "pro",
        "monthly_generations": 0,
        "monthly_edits": 0,
        "generations_limit": PRO_USAGE_LIMIT,
        "edits_limit": PRO_USAGE_LIMIT,
        "subscription_status": "active",
        "last_reset_date": now.isoformat(),
        "subscription_period_end": PRO_SUBSCRIPTION_END,
    }
