"""Workflow operations. Each function takes a persistence port and the caller's identity."""
