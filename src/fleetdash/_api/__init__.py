"""Endpoint modules: one function per fleet API operation."""
