"""
Infrastructure Package
======================

Wiring between the marketplace domain services and their external dependencies.

Modules:
    - container: Lazily built service singletons (cart, ordering, catalog, vendors, research)
    - events: Event bus abstraction (in-memory, Redis pub/sub)
"""
