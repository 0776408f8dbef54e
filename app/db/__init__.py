"""
Database engine, session factory and schema helpers.
"""
