"""API layer — routes, request dependencies and the error envelope.

Routes translate camelCase bodies into service calls and nothing more.
"""
