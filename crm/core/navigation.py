"""Default sidebar menu definition and icon registry."""

from __future__ import annotations

from crm.core.permissions import PermissionKey as P
from crm.schemas.navigation import MenuEntry, MenuItem


# Icon key -> icon component identifier in the front-end icon set
ICON_REGISTRY: dict[str, str] = {
    "dashboard": "LayoutDashboard",
    "money": "Wallet",
    "customers": "Users",
    "insights": "UserCheck",
    "calendar": "Calendar",
    "closers": "UserCog",
    "cohorts": "GraduationCap",
    "trending": "TrendingUp",
    "sparkles": "Sparkles",
    "plus": "Plus",
    "workshops": "Presentation",
    "sales": "DollarSign",
    "funnels": "Filter",
    "products": "Package",
    "users": "Shield",
    "whatsapp": "MessageCircle",
    "settings": "Settings",
    "phone": "Phone",
}

DEFAULT_ICON = "Circle"

# Module slugs gating whole menu sections
MODULE_COHORTS = "cohort-management"
MODULE_WORKSHOPS = "workshops"
MODULE_ONE_TO_ONE = "one-to-one-funnel"
MODULE_WHATSAPP = "whatsapp"

COHORT_SECTION_TITLE = "Cohort Batches"
CREATE_COHORT_PATH = "/manage-cohorts"


def resolve_icon(key: str | None) -> str:
    """Look up an icon identifier, falling back to a neutral icon."""
    if not key:
        return DEFAULT_ICON
    if key in ICON_REGISTRY:
        return ICON_REGISTRY[key]
    # Cohort types may store the component identifier directly
    if key in ICON_REGISTRY.values():
        return key
    return DEFAULT_ICON


def get_default_menu() -> list[MenuEntry]:
    """Static sidebar definition before dynamic entries and filtering."""
    return [
        MenuEntry(title="Dashboard", icon="dashboard", path="/", permission=P.DASHBOARD),
        MenuEntry(
            title="Daily Money Flow",
            icon="money",
            path="/daily-money-flow",
            permission=P.DAILY_MONEY_FLOW,
        ),
        MenuEntry(title="Customers", icon="customers", path="/leads", permission=P.CUSTOMERS),
        MenuEntry(
            title="Customer Insights",
            icon="insights",
            path="/onboarding",
            permission=P.CUSTOMER_INSIGHTS,
        ),
        MenuEntry(
            title="1:1 Call Schedule",
            icon="calendar",
            path="/calls",
            permission=P.CALL_SCHEDULE,
            module_slug=MODULE_ONE_TO_ONE,
        ),
        MenuEntry(
            title="Sales Closers",
            icon="closers",
            path="/sales-closers",
            permission=P.SALES_CLOSERS,
            module_slug=MODULE_ONE_TO_ONE,
        ),
        MenuEntry(
            title=COHORT_SECTION_TITLE,
            icon="cohorts",
            module_slug=MODULE_COHORTS,
            children=(
                MenuItem(
                    title="Insider Crypto Club",
                    icon="cohorts",
                    path="/batches",
                    permission=P.BATCH_ICC,
                ),
                MenuItem(
                    title="Future Mentorship",
                    icon="trending",
                    path="/futures-mentorship",
                    permission=P.BATCH_FUTURES,
                ),
                MenuItem(
                    title="High Future",
                    icon="sparkles",
                    path="/high-future",
                    permission=P.BATCH_HIGH_FUTURE,
                ),
            ),
        ),
        MenuEntry(
            title="All Workshops",
            icon="workshops",
            path="/workshops",
            permission=P.WORKSHOPS,
            module_slug=MODULE_WORKSHOPS,
        ),
        MenuEntry(title="Sales", icon="sales", path="/sales", permission=P.SALES),
        MenuEntry(title="Active Funnels", icon="funnels", path="/funnels", permission=P.FUNNELS),
        MenuEntry(title="Products", icon="products", path="/products", permission=P.PRODUCTS),
        MenuEntry(
            title="WhatsApp",
            icon="whatsapp",
            path="/whatsapp",
            permission=P.WHATSAPP,
            module_slug=MODULE_WHATSAPP,
        ),
        MenuEntry(title="Users", icon="users", path="/users", permission=P.USERS),
        MenuEntry(title="Settings", icon="settings", path="/settings", permission=P.SETTINGS),
    ]
