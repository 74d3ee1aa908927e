"""Adapters for the outside world: database, key/value tables, Facebook, Stripe, logging.

Invariants:
    - Nothing here imports services/ or api/
    - Third-party failures are translated to core/errors.py types before leaving
"""
