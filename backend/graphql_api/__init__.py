"""GraphQL API layer (Strawberry) for session tracking."""
