"""Shared response fragments."""

from uuid import UUID

from pydantic import BaseModel


class PhotoSummary(BaseModel):
    photo_url: str
    caption: str | None = None


class PropertySummary(BaseModel):
    """Display data for a property."""

    id: UUID
    title: str
    address_line1: str | None = None
    city: str | None = None
    country: str | None = None
    photos: list[PhotoSummary] = []


class UserSummary(BaseModel):
    """Display data for a user."""

    id: UUID
    first_name: str | None = None
    last_name: str | None = None
    profile_photo_url: str | None = None


def total_pages(total: int, limit: int) -> int:
    return (total + limit - 1) // limit
