"""
Utility functions module.

Time Semantics:
- The engine reads time only through an injected clock
- Clocks return timezone-aware UTC datetimes
- Signal times are the start of the next one-minute candle
"""
