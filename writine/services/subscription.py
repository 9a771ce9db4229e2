"""
Subscription Plans Configuration

Feature matrix for the Free and Pro tiers. Routing never consults it; the
render surfaces use `remove_branding` to decide whether the
"Powered by Writine" footer is shown.
"""

PLAN_MATRIX = {
    "free": {
        "display_name": "Free",
        "price_monthly_usd": 0,
        "features": {
            "reserved_subdomain": True,
            "custom_domain": True,
            "remove_branding": False,
        },
    },
    "pro": {
        "display_name": "Pro",
        "price_monthly_usd": 12,
        "features": {
            "reserved_subdomain": True,
            "custom_domain": True,
            "remove_branding": True,
        },
    },
}


def get_plan(plan_name: str) -> dict:
    """Get plan config by name. Falls back to 'free'."""
    return PLAN_MATRIX.get(plan_name, PLAN_MATRIX["free"])


def get_plan_feature(plan_name: str, feature: str) -> bool:
    """Check if a feature is available for a plan."""
    plan = get_plan(plan_name)
    return plan["features"].get(feature, False)


def get_upgrade_suggestion(current_plan: str, feature: str) -> str | None:
    """Suggest which plan to upgrade to for a given feature."""
    if get_plan_feature(current_plan, feature):
        return None

    for plan_name in PLAN_MATRIX:
        if get_plan_feature(plan_name, feature):
            plan = get_plan(plan_name)
            return f"Upgrade to {plan['display_name']} (${plan['price_monthly_usd']}/month) to unlock this"
    return None
