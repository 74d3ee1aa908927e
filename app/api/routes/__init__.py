"""HTTP routes, one module per resource. Each exposes `router`; main.py includes them."""
