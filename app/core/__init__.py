"""Pledgebook core — contribution rules, stored record shapes, key naming, errors.

Invariants:
    - Nothing here awaits, opens a connection or reads the clock; services pass `now`
    - identifiers.py is the one module that touches randomness
"""
