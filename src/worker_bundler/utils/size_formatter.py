# Decimal (SI) prefixes; sizes are reported the way npm and webpack print them.
DECIMAL_PREFIXES = ["k", "M", "G", "T", "P", "E", "Z", "Y"]


def format_size(size: float) -> str:
    """Render a byte count as a human readable string, e.g. ``12 kB``."""
    if size < 1000:
        return f"{round(size)} bytes"

    value = float(size)
    prefix = ""
    for prefix in DECIMAL_PREFIXES:
        value /= 1000
        if value < 1000:
            break

    return f"{value:.0f} {prefix}B"
