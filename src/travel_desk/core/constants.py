"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

from decimal import Decimal

from .enums import EffectiveRole

DEFAULT_SESSION_DAYS = 7

# Admins who never switched role land on the manager dashboard.
DEFAULT_ADMIN_EFFECTIVE_ROLE = EffectiveRole.MANAGER

LOGIN_PATH = "/login"
FALLBACK_HOME_PATH = "/"

HOME_PATHS = {
    EffectiveRole.MANAGER: "/manager",
    EffectiveRole.PM: "/pm",
    EffectiveRole.OPERATIONS_KSA: "/operations",
    EffectiveRole.OPERATIONS_UAE: "/operations",
}

DEFAULT_ANNUAL_TRAVEL_BUDGET = Decimal("15000")

IDENTITY_FETCH_TIMEOUT_SECONDS = 5
MIN_PASSWORD_LENGTH = 6
