"""Core backend infrastructure for the Aureeture API.

This package contains configuration, logging, database, authentication and
dependency helpers used by the FastAPI application entrypoint.
"""
