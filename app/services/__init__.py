"""Services — the IO around the core: lookups, Facebook, Stripe, store writes.

Invariants:
    - Collaborators are injected by container.py; no service builds its own
    - Concurrency goes through task_flow.py so failure semantics stay explicit
"""
