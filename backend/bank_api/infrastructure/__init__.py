"""Infrastructure Layer — database access, rate limiting and logging.

Invariants:
    - Infrastructure never imports from api/ or services/
    - All database calls wrapped with rollback and error mapping

Design Decisions:
    - Gateway implements core/repository_protocols.py (ADR: persistence is an external collaborator)
"""
