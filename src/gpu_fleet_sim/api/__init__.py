"""HTTP API over the projection engine."""
