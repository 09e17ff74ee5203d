"""
Infrastructure package.

Adapters for the database, the notification service and monitoring. Submodules
are imported explicitly to keep the application layer free of import cycles.
"""
