"""
Data quality error classifications for indicator snapshots.

These exceptions describe snapshots and signal records that are missing
or shaped incorrectly when they reach the scorer or the resolver.
"""

from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for input data issues."""
    
    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MissingDataError(DataQualityError):
    """Required data is completely missing."""
    
    def __init__(self, message: str, data_type: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.data_type = data_type


class MalformedDataError(DataQualityError):
    """Data exists but is in incorrect format."""
    
    def __init__(self, message: str, raw_data: Optional[Any] = None, 
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format
