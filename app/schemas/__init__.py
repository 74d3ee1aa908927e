"""Request/response bodies. camelCase on the wire, snake_case in Python.

Stored shapes live in core/records.py; these are only the HTTP contract.
"""
