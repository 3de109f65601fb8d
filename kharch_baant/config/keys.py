"""
Recognized configuration keys.

DESIGN DECISION: The key tables are static and declared in one place.
Declaration order is significant: validation reports list missing keys
and warnings in this order, so output is deterministic.
"""

# Keys without which the application cannot be used
REQUIRED_KEYS: tuple[str, ...] = (
    "SUPABASE_URL",
    "SUPABASE_ANON_KEY",
    "API_MODE",
    "CLERK_PUBLISHABLE_KEY",
)

# Keys whose absence only disables a feature
OPTIONAL_KEYS: tuple[str, ...] = (
    "GEMINI_API_KEY",
    "DEBUG_ENABLED",
    "DEV_MODE",
)

# Identity provider publishable key - the app tree is never mounted without it
CRITICAL_KEY = "CLERK_PUBLISHABLE_KEY"

DEBUG_FLAG_KEY = "DEBUG_ENABLED"

# Optional key -> warning shown when it is not set
OPTIONAL_KEY_ADVISORIES: dict[str, str] = {
    "GEMINI_API_KEY": "GEMINI_API_KEY is not set - AI tag suggestions will be disabled",
}

# Required key -> template text it holds when copied unmodified from .env.example
PLACEHOLDER_VALUES: dict[str, str] = {
    "SUPABASE_URL": "your_supabase_project_url",
    "SUPABASE_ANON_KEY": "your_supabase_anon_key",
}

PLACEHOLDER_REASON = "contains placeholder value"

# Build-tool prefix carried over from the web client's .env files
BUILD_TOOL_PREFIX = "VITE_"
