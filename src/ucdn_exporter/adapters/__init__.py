"""Adapters connecting the core pipeline to UCloud, sinks and HTTP frameworks."""
