from core.settings import Settings

# Settings singleton
_settings = None


def get_settings() -> Settings:
    """Return the settings singleton, loading it from the environment on first use."""
    if _settings is None:
        init_settings()
    return _settings


def init_settings():
    """Initialize settings singleton."""
    global _settings
    _settings = Settings()


def clear_settings():
    """Clear settings singleton."""
    global _settings
    _settings = None
