"""Timeframe codes and resolutions accepted by the gateway"""

TIMEFRAME_DAYS = {
    "1M": 30,
    "3M": 90,
}
DEFAULT_DAYS = 365

RESOLUTIONS = ("auto", "daily")


def timeframe_to_days(window: str | int) -> int:
    """
    Map a timeframe code or explicit day count to a number of days

    Example:
        >>> timeframe_to_days("3M")
        90
        >>> timeframe_to_days("1Y")
        365
        >>> timeframe_to_days(7)
        7
    """
    if isinstance(window, int):
        if window < 1:
            raise ValueError(f"Day count must be >= 1, got {window}")
        return window
    return TIMEFRAME_DAYS.get(window, DEFAULT_DAYS)


def validate_resolution(resolution: str) -> str:
    if resolution not in RESOLUTIONS:
        raise ValueError(f"Unknown resolution '{resolution}'. Supported: {', '.join(RESOLUTIONS)}")
    return resolution
