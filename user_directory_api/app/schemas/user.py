"""
Pydantic models for user data.

``User`` is the stored record and the response body.  Its creation
timestamp is exposed on the wire as ``createdAt``.  ``UserCreate`` and
``UserUpdate`` describe request bodies; every field is optional at the
schema level because presence is checked by the endpoint so that a
missing field yields the API's own 400 message instead of a framework
validation error.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Role labels offered by the UI.  The service accepts any string.
KNOWN_ROLES = ("User", "Admin", "Manager", "Developer")


class UserBase(BaseModel):
    name: str = Field(..., examples=["John Doe"])
    email: str = Field(..., examples=["john@example.com"])
    role: str = Field(..., examples=["Admin"])


class User(UserBase):
    """A user record as held by the service and returned by the API."""

    id: str
    created_at: str = Field(..., alias="createdAt", examples=["2026-01-01T00:00:00.000Z"])

    model_config = ConfigDict(populate_by_name=True)


class UserCreate(BaseModel):
    """Body of ``POST /users``."""

    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None

    def missing_fields(self) -> list:
        """Names of required fields that are absent or empty."""
        return [field for field in ("name", "email", "role") if not getattr(self, field)]


class UserUpdate(BaseModel):
    """Body of ``PUT /users/{id}``.

    All fields are optional; only provided values will be updated.
    """

    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None

    def changes(self) -> dict:
        """Fields the client actually sent with a non-null value."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ErrorResponse(BaseModel):
    error: str


class MessageResponse(BaseModel):
    message: str
