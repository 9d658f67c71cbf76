import json
from datetime import datetime
from tt.common.logger import log
from tt.common.setup import PATHS


_SCHEMA_VERSION = 1

#region === Helpers and Paths ===

SETTINGS_PATH = PATHS.settings

# Default value and accepted type(s) for every setting. There is no elapsed time here, a stopwatch always
# launches at zero.
_SETTINGS_DEFAULTS = {
    "voice_language": ("en-US", str),
    "speech_rate": (0.0, (int, float)),
    "tick_interval_ms": (10, int),
    "rotary_debounce_ms": (500, int),
    "rotary_threshold": (24.0, (int, float)),
    "wheel_units_per_notch": (4.0, (int, float)),
    "short_press_ms": (200, int),
    "long_press_ms": (1000, int),
    "haptics_enabled": (True, bool),
    "keep_alive_minutes": (60, int),
    "font": ("Menlo", str),
    "console_log": (False, bool),
}

# Simply returns the current local time as an ISO8601 string with timezone offset.
def now_iso():
    return datetime.now().astimezone().isoformat()

# Returns a truly fresh settings dict made only of defaults.
def default_settings():
    return {key: default for key, (default, _) in _SETTINGS_DEFAULTS.items()}

# Lower bounds for numeric settings. A 0ms tick would spin the event loop.
_MINIMUMS = {
    "tick_interval_ms": 1,
    "rotary_debounce_ms": 0,
    "rotary_threshold": 0,
    "short_press_ms": 0,
    "long_press_ms": 1,
    "keep_alive_minutes": 0,
}

# bool is an int subclass, so True must not pass as a tick interval.
def _valid(key, value, expected):
    if isinstance(value, bool) and expected is not bool:
        return False
    if not isinstance(value, expected):
        return False
    return key not in _MINIMUMS or value >= _MINIMUMS[key]

#endregion === Helpers and Paths ===

#region === Saving and Loading Settings ===

# Loads settings from PATHS.settings, defaulting anything missing, of the wrong type or out of range. The first
# launch writes a fresh file so users have something to edit.
def load_settings():
    try:
        if not SETTINGS_PATH.exists():
            settings = default_settings()
            save_settings(settings)
            log.info(f"No existing settings.json found, wrote fresh defaults to '{SETTINGS_PATH}'.")
            return settings

        with open(SETTINGS_PATH, "r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise TypeError(f"Expected a JSON object in settings.json, got {type(raw).__name__}")

        stored = raw.get("settings")
        if not isinstance(stored, dict):
            stored = {}
        settings = {}
        defaulted_values = set()
        for key, (default, expected) in _SETTINGS_DEFAULTS.items():
            value = stored.get(key)
            if _valid(key, value, expected):
                settings[key] = value
            else:
                defaulted_values.add(key)
                settings[key] = default

        # A long press has to outlast a short one, otherwise neither gesture is reachable
        if settings["long_press_ms"] <= settings["short_press_ms"]:
            for key in ("short_press_ms", "long_press_ms"):
                defaulted_values.add(key)
                settings[key] = _SETTINGS_DEFAULTS[key][0]

        if defaulted_values:
            log.warning(f"Loaded settings from '{SETTINGS_PATH}', but with missing or invalid values that were defaulted: {', '.join(sorted(defaulted_values))}")
        else:
            log.info(f"Successfully loaded settings from '{SETTINGS_PATH}'.")
        return settings
    # Fall back to defaults in case of error, but warn in log
    except (json.JSONDecodeError, OSError, TypeError):
        log.warning("Ran into an error while trying to load settings.json, falling back to default settings.",exc_info=True)
        return default_settings()

# Writes the given settings to PATHS.settings.
def save_settings(settings):
    payload = {
        "meta": {
            "schema_version": _SCHEMA_VERSION,
            "saved_at": now_iso(),
        },
        "settings": dict(settings),
    }
    with open(SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)
    log.info(f"Successfully saved settings to '{SETTINGS_PATH}'")

#endregion === Saving and Loading Settings ===
