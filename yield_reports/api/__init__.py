"""HTTP surface of the report server."""
