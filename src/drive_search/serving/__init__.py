"""
Serving — FastAPI application exposing ingestion and search over HTTP.

Sign-in and session handling live in front of this service; requests
arrive with the user's access token in the ``Authorization`` header.
"""
