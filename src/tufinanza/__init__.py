# src/tufinanza/__init__.py
"""
TuFinanza - Personal Finance Core

Multi-currency personal finance tracking: user profile, income/expense/saving
movements, saving goals, currency conversion through a USD pivot and a
time-to-live cache of simulated market quotes, all persisted through a
string key-value store.
"""

__version__ = "1.0.0"
