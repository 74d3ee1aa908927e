"""Pledgebook — political contribution API.

Invariants:
    - Importing the package has no side effects; the FastAPI app lives in app.main
"""

__version__ = "1.0.0"
