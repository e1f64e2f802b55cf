# src/tufinanza/adapters/__init__.py
"""
Adapters Layer - External Interfaces

This package contains all adapters for external systems:
- Persistence (key-value storage)
- Formatting (output)
"""

__all__ = []
