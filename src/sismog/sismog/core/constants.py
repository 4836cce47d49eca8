"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

DEFAULT_TAX_REGIME = "Simples Nacional"
MIN_PASSWORD_LENGTH = 6

FEEDBACK_SESSION_KEY = "feedback"

COMPANIES = "companies"
EMPLOYEES = "employees"
PENALTIES = "penalties"
PROFILES = "profiles"

# Fixed values for a profile row created by the recovery branch.
DEFAULT_PROFILE_PERMISSION = 1
DEFAULT_PROFILE_CATEGORY = "Gestão"

# A password reset link is accepted for this long after it was requested.
RESET_TOKEN_TTL_MINUTES = 60
