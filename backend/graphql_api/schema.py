"""Main GraphQL schema factory.

The Query and Mutation root classes are defined in app.py next to the
context wiring; this module builds the schema from them.

Usage:
    from graphql_api.schema import create_schema
    schema = create_schema()
"""

import strawberry


def create_schema() -> strawberry.Schema:
    """Create Strawberry schema with fasting and exercise resolvers."""
    # Import here to avoid circular dependency
    from app import Mutation, Query

    return strawberry.Schema(
        query=Query,
        mutation=Mutation,
    )
