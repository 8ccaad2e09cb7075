"""Bearer-token authentication adapters."""
