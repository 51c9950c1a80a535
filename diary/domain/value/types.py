"""Domain value objects for the diary.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

from pydantic import Field, field_validator, model_validator

from diary.domain.value.common import ValueObject


class AuthMethod(str, Enum):
    """Ways a user can prove their identity."""

    EMAIL = "email"
    GOOGLE = "google"
    APPLE = "apple"


class MediaType(str, Enum):
    """Kind of media attached to an entry."""

    IMAGE = "image"
    VIDEO = "video"
    AUDIO = "audio"
    PDF = "pdf"

    @classmethod
    def from_content_type(cls, content_type: str) -> "MediaType":
        """Classify a MIME type.

        Raises:
            ValueError: If the MIME type is not an accepted upload type
        """
        if content_type.startswith("image/"):
            return cls.IMAGE
        if content_type.startswith("video/"):
            return cls.VIDEO
        if content_type.startswith("audio/"):
            return cls.AUDIO
        if content_type == "application/pdf":
            return cls.PDF
        raise ValueError(f"Unsupported file type: {content_type}")


class Platform(str, Enum):
    """Store platform a purchase was made on."""

    ANDROID = "android"
    IOS = "ios"


class Location(ValueObject):
    """Geographic point attached to an entry."""

    latitude: float = 0.0
    longitude: float = 0.0
    address: str = ""

    @field_validator("latitude")
    @classmethod
    def validate_latitude(cls, v: float) -> float:
        """Latitude must be within [-90, 90]."""
        if not -90 <= v <= 90:
            raise ValueError("Latitude must be between -90 and 90")
        return v

    @field_validator("longitude")
    @classmethod
    def validate_longitude(cls, v: float) -> float:
        """Longitude must be within [-180, 180]."""
        if not -180 <= v <= 180:
            raise ValueError("Longitude must be between -180 and 180")
        return v


class FormatSpan(ValueObject):
    """Inline formatting applied to a range of an entry's description."""

    start: int = Field(ge=0)
    end: int = Field(ge=0)
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    heading_level: int | None = Field(default=None, ge=1, le=6)

    @model_validator(mode="after")
    def validate_range(self) -> "FormatSpan":
        """End must not precede start."""
        if self.end < self.start:
            raise ValueError("Format span end must not precede start")
        return self


class OAuthIdentity(ValueObject):
    """Identity asserted by an external OAuth / OpenID Connect provider.

    Returned by provider adapters after a token or code has been verified.
    """

    provider: AuthMethod
    provider_user_id: str
    email: str | None = None
    email_verified: bool = False
    name: str | None = None
    avatar_url: str | None = None
