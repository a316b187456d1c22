"""
System failure error classifications.

These exceptions represent precondition violations: configuration that
cannot be used, or a signal lifecycle operation that must never happen.
"""

from typing import Optional, Dict, Any


class SystemFailureError(Exception):
    """Base class for unrecoverable failures."""
    
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class ConfigurationError(SystemFailureError):
    """Configuration overrides failed validation."""
    
    def __init__(self, message: str, errors: Optional[list] = None, 
                 source: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
        self.source = source


class UnknownStrategyError(SystemFailureError):
    """Strategy / risk profile combination has no base win rate."""
    
    def __init__(self, message: str, strategy: Optional[str] = None, 
                 risk_profile: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.strategy = strategy
        self.risk_profile = risk_profile


class StateTransitionError(SystemFailureError):
    """Invalid signal result transition."""
    
    def __init__(self, message: str, current_state: Optional[str] = None, 
                 attempted_transition: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_state = current_state
        self.attempted_transition = attempted_transition
