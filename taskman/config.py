"""Configuration management for taskman.

Centralizes all environment variable access for better testability and maintainability.
"""

import os
from typing import Dict, Optional

# Environment variable -> RetryPolicy field
RETRY_ENV_VARS = {
    "TASKMAN_RETRY_MAX_RETRIES": "max_retries",
    "TASKMAN_RETRY_INITIAL_DELAY": "initial_delay",
    "TASKMAN_RETRY_MAX_DELAY": "max_delay",
    "TASKMAN_RETRY_BACKOFF_FACTOR": "backoff_factor",
}


class Config:
    """Application configuration loaded from environment variables."""

    # Supabase configuration
    @staticmethod
    def supabase_url() -> Optional[str]:
        """Get Supabase project URL from environment."""
        return os.environ.get("SUPABASE_URL")

    @staticmethod
    def supabase_anon_key() -> Optional[str]:
        """Get Supabase anon key from environment."""
        return os.environ.get("SUPABASE_ANON_KEY") or os.environ.get("SUPABASE_KEY")

    # Retry defaults
    @staticmethod
    def retry_overrides() -> Dict[str, str]:
        """Get retry policy overrides that are set in the environment.

        Values are returned as raw strings; validation happens when they are
        merged into a policy.
        """
        overrides = {}
        for env_var, field_name in RETRY_ENV_VARS.items():
            value = os.environ.get(env_var)
            if value is not None and value.strip():
                overrides[field_name] = value.strip()
        return overrides

    # Logging
    @staticmethod
    def log_level() -> str:
        """Get log level name from environment."""
        return os.environ.get("TASKMAN_LOG_LEVEL", "INFO")

    # Helper methods
    @staticmethod
    def is_configured() -> bool:
        """Check if all required configuration is present."""
        return all([
            Config.supabase_url(),
            Config.supabase_anon_key(),
        ])

    @staticmethod
    def get_missing_config() -> list[str]:
        """Get list of missing required configuration keys."""
        missing = []
        if not Config.supabase_url():
            missing.append("SUPABASE_URL")
        if not Config.supabase_anon_key():
            missing.append("SUPABASE_ANON_KEY or SUPABASE_KEY")
        return missing


# Singleton instance for easy access
config = Config()
