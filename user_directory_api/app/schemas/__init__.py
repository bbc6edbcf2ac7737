"""
Pydantic schema definitions for API payloads.

Request bodies are parsed into these models by the endpoints; the
stored ``User`` record is also a Pydantic model so it can be returned
directly as a response body.
"""
