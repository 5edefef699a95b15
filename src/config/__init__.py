"""Configuration package.

Note: import settings from ``src.config.settings`` directly where needed so
tests can reload the module with a patched environment.
"""

__all__: list[str] = []
