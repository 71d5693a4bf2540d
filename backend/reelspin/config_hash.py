"""Config hash shared by the /init response and the session simulator.

Both report the same digest so a recorded simulation can be matched to the
machine configuration that served it.
"""
import hashlib
import json

from reelspin.config import Settings, settings as default_settings


def get_config_hash(settings: Settings | None = None) -> str:
    """
    Generate hash of the gameplay-relevant configuration.

    Returns 16-char hex hash of config snapshot.
    """
    settings = settings or default_settings
    config_snapshot = {
        "available_amounts": list(settings.available_amounts),
        "column_options": list(settings.column_options),
        "row_options": list(settings.row_options),
        "symbols": list(settings.symbols),
        "spin_duration_seconds": settings.spin_duration_seconds,
        "spin_speed": settings.spin_speed,
    }
    canonical = json.dumps(config_snapshot, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode()).hexdigest()[:16]
