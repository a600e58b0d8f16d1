import os

def get_settings_module() -> str:
    # APP_ENV picks the settings module, 'development' by default
    env = os.getenv("APP_ENV", "development").lower()

    # 1. Production
    if env in {"prod", "production"}:
        return "config.production"

    # 2. Testing
    if env in {"test", "testing"}:
        return "config.testing"

    # 3. Anything else runs as development
    return "config.development"
