"""Session application layer - CQRS commands and queries."""
