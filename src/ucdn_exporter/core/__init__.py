"""Core scrape pipeline: models, ports, schema, reduction and aggregation."""
