"""Example scripts for the path tracer."""
