"""
Persistence plumbing: declarative base, engine/session factory and the
context adapter the store delegates to.
"""
