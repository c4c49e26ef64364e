"""
Monitoring
- Structured JSON logging with rotating file handlers
- In-memory metric collection with JSON file export
"""

from .factory import MonitoringFactory
from .logger import MonitoringService

__all__ = ["MonitoringFactory", "MonitoringService"]
