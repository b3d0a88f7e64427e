"""
Pydantic schemas for request and response validation.

Required request fields default to None and are checked by validators, so
a missing field and an empty one produce the same human-readable message
in the 400 error payload.
"""

from datetime import date, datetime
from typing import Annotated, Any

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field

from devconnector.security.passwords import BCRYPT_MAX_BYTES
from devconnector.services.profile_service import parse_skills

MIN_PASSWORD_LENGTH = 6


def _required(message: str):
    def check(value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError(message)
        if isinstance(value, list) and not value:
            raise ValueError(message)
        return value

    return AfterValidator(check)


def _valid_email(value: str | None) -> str | None:
    if value is None:
        raise ValueError("Please include a valid email")
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError("Please include a valid email") from None
    return value.strip().lower()


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


OptionalDate = Annotated[date | None, BeforeValidator(_blank_to_none)]


# =============================================================================
# Auth / users
# =============================================================================


class LoginRequest(BaseModel):
    email: Annotated[str | None, AfterValidator(_valid_email)] = Field(default=None, validate_default=True)
    password: Annotated[str | None, _required("Password is required")] = Field(
        default=None, validate_default=True
    )


def _register_password(value: str | None) -> str | None:
    message = f"Please enter a password with {MIN_PASSWORD_LENGTH} or more characters"
    if value is None or len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(message)
    if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes")
    return value


class RegisterRequest(BaseModel):
    name: Annotated[str | None, _required("Name is required")] = Field(default=None, validate_default=True)
    email: Annotated[str | None, AfterValidator(_valid_email)] = Field(default=None, validate_default=True)
    password: Annotated[str | None, AfterValidator(_register_password)] = Field(
        default=None, validate_default=True
    )


class TokenResponse(BaseModel):
    token: str


class UserResponse(BaseModel):
    """A user as returned to clients. There is deliberately no password field."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    avatar: str | None = None
    date: datetime | None = None


class MessageResponse(BaseModel):
    msg: str


# =============================================================================
# Profiles
# =============================================================================


def _skills_list(value: str | list[str] | None) -> list[str]:
    # " , " is not blank but holds no skills
    skills = parse_skills(value or [])
    if not skills:
        raise ValueError("Skills are required")
    return skills


class ProfileUpsertRequest(BaseModel):
    status: Annotated[str | None, _required("Status is required")] = Field(default=None, validate_default=True)
    skills: Annotated[str | list[str] | None, AfterValidator(_skills_list)] = Field(
        default=None, validate_default=True
    )
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class ExperienceRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Annotated[str | None, _required("Title is required")] = Field(default=None, validate_default=True)
    company: Annotated[str | None, _required("Company is required")] = Field(default=None, validate_default=True)
    from_: Annotated[OptionalDate, _required("From date is required")] = Field(
        default=None, alias="from", validate_default=True
    )
    to: OptionalDate = None
    current: bool = False
    location: str | None = None
    description: str | None = None


class EducationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    school: Annotated[str | None, _required("School is required")] = Field(default=None, validate_default=True)
    degree: Annotated[str | None, _required("Degree is required")] = Field(default=None, validate_default=True)
    fieldofstudy: Annotated[str | None, _required("Field of study is required")] = Field(
        default=None, validate_default=True
    )
    from_: Annotated[OptionalDate, _required("From date is required")] = Field(
        default=None, alias="from", validate_default=True
    )
    to: OptionalDate = None
    current: bool = False
    description: str | None = None


class ProfileOwner(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    avatar: str | None = None


class ExperienceResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    company: str
    location: str | None = None
    from_: date = Field(alias="from")
    to: date | None = None
    current: bool = False
    description: str | None = None


class EducationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    school: str
    degree: str
    fieldofstudy: str
    from_: date = Field(alias="from")
    to: date | None = None
    current: bool = False
    description: str | None = None


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user: ProfileOwner
    status: str
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    skills: list[str] = Field(default_factory=list)
    social: dict[str, str] = Field(default_factory=dict)
    experience: list[ExperienceResponse] = Field(default_factory=list)
    education: list[EducationResponse] = Field(default_factory=list)
    date: datetime | None = None


# =============================================================================
# Posts
# =============================================================================


class PostCreateRequest(BaseModel):
    text: Annotated[str | None, _required("Text is required")] = Field(default=None, validate_default=True)


class PostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    text: str
    name: str | None = None
    avatar: str | None = None
    date: datetime | None = None
