"""
Utilities Layer
- Provides cross-cutting functionality
- Manages configuration and validation
- Structured logging and metrics
"""
