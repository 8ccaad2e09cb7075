"""Session domain: fasting windows and exercise workouts.

Shared lifecycle (start/stop with a single active session per user) and
pure analytics over completed sessions.
"""
