"""Pure marketplace transaction analytics."""
