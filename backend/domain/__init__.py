"""Domain layer for session tracking.

Business rules for fasting and exercise sessions, decoupled from the
GraphQL presentation and from infrastructure.
"""
