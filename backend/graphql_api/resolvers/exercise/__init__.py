"""Exercise session resolvers."""

from .mutations import ExerciseMutations
from .queries import ExerciseQueries

__all__ = ["ExerciseQueries", "ExerciseMutations"]
