"""Application package for the graduate application tracker backend.

This package exposes the service, repository and model modules used by
the FastAPI application that records PhD professor outreach and Masters
program applications per user.
"""
