# Content records read from the media library JSON files
from pydantic import BaseModel, field_validator
from typing import Optional


class MediaLibraryContent(BaseModel):
    id: str
    caption: Optional[str] = ""
    hashtags: Optional[str] = ""
    mentions: Optional[str] = ""

    @field_validator("caption", "hashtags", "mentions", mode="before")
    @classmethod
    def empty_text_for_null(cls, value):
        # JSON null in a text field reads as an empty string
        return "" if value is None else value

    def to_embedding_input(self) -> str:
        return (
            f"The caption is as follows: {self.caption}. "
            f"The hashtags are as follows: {self.hashtags}. "
            f"The mentions are as follows: {self.mentions}"
        )


class ContactContent(BaseModel):
    """Contact-schema record: a creator contact with audience metrics"""
    id: str
    contact: Optional[str] = ""
    reach: Optional[float] = None
    engagement: Optional[float] = None

    @field_validator("contact", mode="before")
    @classmethod
    def empty_text_for_null(cls, value):
        return "" if value is None else value

    def to_embedding_input(self) -> str:
        return (
            f"The contact is as follows: {self.contact}. "
            f"The reach is as follows: {self.reach if self.reach is not None else 'unknown'}. "
            f"The engagement is as follows: {self.engagement if self.engagement is not None else 'unknown'}"
        )
