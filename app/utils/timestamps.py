import time


def epoch_millis() -> int:
    """Current wall-clock time as integer epoch milliseconds."""
    return int(time.time() * 1000)
