"""Kernel time – clocks and timestamp helpers."""
from fitview.kernel.time.clock import Clock, FrozenClock, SystemClock, in_same_month, parse_timestamp

__all__ = ["Clock", "FrozenClock", "SystemClock", "in_same_month", "parse_timestamp"]
