# Infrastructure layer - database, storage, view invalidation
"""
Infrastructure layer contains:
- Database connection and repositories
- Object storage adapters
- The process-wide view invalidation signal

Application services depend on this layer, not vice versa.
"""
