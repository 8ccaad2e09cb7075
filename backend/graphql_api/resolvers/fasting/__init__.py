"""Fasting session resolvers."""

from .mutations import FastingMutations
from .queries import FastingQueries

__all__ = ["FastingQueries", "FastingMutations"]
