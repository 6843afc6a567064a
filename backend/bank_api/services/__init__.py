"""Services Layer — orchestrates core rules around gateway IO.

Invariants:
    - Services return result values; they never build HTTP responses
"""
