"""
Personal Tracker - Source Package

Habit streaks, an expense/income ledger, a monthly budget check and a
calendar view over both, kept in a local key-value store.

DESIGN PRINCIPLES:
1. One engine object owns each collection; no module-level state
2. Reject bad input before touching anything
3. Reads from the store never fail; writes never interrupt the user
4. Every state change is logged
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Personal Tracker Team"
