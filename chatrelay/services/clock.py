# chatrelay/services/clock.py
import time
from datetime import datetime


def now_ms() -> int:
    """Epoch milliseconds, used for participant liveness."""
    return int(time.time() * 1000)


def clock_time() -> str:
    """Local wall-clock time as HH:MM:SS, used to stamp messages."""
    return datetime.now().strftime("%H:%M:%S")
