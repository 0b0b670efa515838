from ragkit.core.config import Settings


def get_test_settings(**overrides) -> Settings:
    """Returns a Settings instance for testing.

    Ignores any local ``.env`` file so tests only see defaults plus the
    explicit *overrides*.
    """
    return Settings(_env_file=None, **overrides)
