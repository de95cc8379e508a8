"""
HR Kernel

Shared foundation for the HR core packages:
- Injectable clock
- Structured JSON logging
- Typed exception hierarchy
- SQLAlchemy declarative base and session management
"""

__version__ = "0.1.0"
