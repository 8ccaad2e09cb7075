"""GraphQL resolvers for session tracking."""
