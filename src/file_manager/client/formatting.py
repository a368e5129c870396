"""Display helpers for object listings."""

SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


def format_file_size(size_bytes: int) -> str:
    """Human readable size with binary multiples, e.g. 2048 -> "2 KB"."""
    if size_bytes < 0:
        raise ValueError("size_bytes must not be negative")
    if size_bytes == 0:
        return "0 Bytes"

    value = float(size_bytes)
    unit = 0
    while value >= 1024 and unit < len(SIZE_UNITS) - 1:
        value /= 1024
        unit += 1
    return f"{round(value, 2):g} {SIZE_UNITS[unit]}"
