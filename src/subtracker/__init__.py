"""Subtracker — recurring subscription payment tracker.

A small authenticated REST API: users register and log in, then keep
a private ledger of the subscriptions they pay for (service, bank,
card last-4, billing cycle, next charge date).
"""

__version__ = "0.1.0"
