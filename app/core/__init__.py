"""
Core package: settings, password hashing, Celery app and domain errors.
"""
