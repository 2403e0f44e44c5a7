"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that multiple features use
(DB wiring, error rendering, logging). Keep feature-specific SQL and request
handling in the corresponding feature package (e.g. `papers/`).
"""
