"""
Backend package for the Florte API.

This package provides a FastAPI application that replaces the platform's
edge functions: routed CRUD over the hosted Postgres tables, storage URL
signing, and relays to the Gemini API.
"""
