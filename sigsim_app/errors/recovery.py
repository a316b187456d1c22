"""
Recovery strategy classifications for error handling.

Errors here leave the system in a consistent state; the caller may retry
the same operation later.
"""

from typing import Optional


class RecoverableError(Exception):
    """Mixin for errors that can be recovered from by retrying later."""
    
    def __init__(self, message: str, retry_count: int = 0, 
                 max_retries: int = 0, **kwargs):
        super().__init__(message)
        self.retry_count = retry_count
        self.max_retries = max_retries
        self.recoverable = True


class CooldownActiveError(RecoverableError):
    """Signal generation was requested inside the cooldown window."""
    
    def __init__(self, message: str, retry_after_seconds: Optional[float] = None, 
                 **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after_seconds = retry_after_seconds
