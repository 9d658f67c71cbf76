import math

# Hundredths are rounded to this many decimals before truncating, which absorbs binary float noise (0.29 * 100 is
# 28.999999999999996) without ever rounding a real fraction up.
_NOISE_DIGITS = 6


# Splits elapsed seconds into (minutes, seconds, centiseconds). Fractions are truncated, so the display never runs
# ahead of the real time. Negative values clamp to zero.
def split_elapsed(elapsed):
    elapsed = max(0.0, float(elapsed))
    whole = int(elapsed)
    centis = min(99, int(round((elapsed - math.floor(elapsed)) * 100, _NOISE_DIGITS)))
    return whole // 60, whole % 60, centis


# Formats elapsed seconds as MM:SS.CC. Minutes are not clamped, so 100+ minutes grow a third digit.
def format_display(elapsed):
    minutes, seconds, centis = split_elapsed(elapsed)
    return f"{minutes:02d}:{seconds:02d}.{centis:02d}"


def _plural(value, singular, plural):
    return f"{value} {singular if value == 1 else plural}"


# Formats elapsed seconds as a phrase for text-to-speech, e.g. "1 minute, 1 second".
# Hundredths are read out as "milliseconds" with their 0-99 value.
def format_spoken(elapsed):
    minutes, seconds, centis = split_elapsed(elapsed)
    components = []
    if minutes > 0:
        components.append(_plural(minutes, "minute", "minutes"))
    if seconds > 0:
        components.append(_plural(seconds, "second", "seconds"))
    if centis > 0:
        components.append(f"{centis} milliseconds")
    if not components:
        return "0 seconds"
    return ", ".join(components)
