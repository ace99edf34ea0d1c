"""User schema definitions.

This module defines the User record kept by the store and the request and
response models of the authentication and profile endpoints.
"""

from typing import Optional

from pydantic import Field

from alumni_portal.schemas.base import CamelModel, UpdateBool, UpdateStr


class UserProfile(CamelModel):
    """Optional profile data an alumnus fills in after registering."""

    profile_image: Optional[str] = None

    # Personal data
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    pincode: Optional[str] = None
    date_of_birth: Optional[str] = None
    gender: Optional[str] = None
    bio: Optional[str] = None

    # Educational data
    graduation_year: Optional[int] = None
    degree: Optional[str] = None
    branch: Optional[str] = None
    college_name: Optional[str] = None
    roll_number: Optional[str] = None
    achievements: Optional[str] = None

    # Professional data
    company: Optional[str] = None
    position: Optional[str] = None
    work_experience: Optional[int] = None
    industry: Optional[str] = None

    # Social media & professional profiles
    linkedin_profile: Optional[str] = None
    instagram_username: Optional[str] = None
    whatsapp_number: Optional[str] = None
    codechef_profile: Optional[str] = None
    hackerrank_profile: Optional[str] = None
    hackerearth_profile: Optional[str] = None
    leetcode_profile: Optional[str] = None
    other_profiles: Optional[str] = None

    # Skills that helped them get a job
    skills: Optional[str] = None
    special_skills: Optional[str] = None


class UserBase(UserProfile):
    username: str = Field(min_length=1, description="Unique login name.")
    email: str = Field(min_length=3, description="Unique email address.")
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)


class UserInsert(UserBase):
    password_hash: str = Field(description="Bcrypt hash of the user's password.")
    is_admin: bool = False
    is_profile_complete: bool = False


class User(UserInsert):
    """A stored user. Never returned to clients directly; see UserPublic."""

    id: int


class UserPublic(UserBase):
    """A user as sent to clients, without the password hash."""

    id: int
    is_admin: bool = False
    is_profile_complete: bool = False


class RegisterRequest(UserBase):
    password: str = Field(min_length=6)
    admin_token: Optional[str] = Field(
        default=None,
        description="Registers an administrator when it matches ADMIN_TOKEN.",
    )


class LoginRequest(CamelModel):
    username: str
    password: str


class LoginResponse(CamelModel):
    user: UserPublic
    token: str


class ProfileUpdate(UserProfile):
    """Fields a user may change on their own profile. Unset fields are kept."""

    email: UpdateStr = None
    first_name: UpdateStr = None
    last_name: UpdateStr = None
    is_profile_complete: UpdateBool = None


class UserUpdate(ProfileUpdate):
    """Profile changes plus the admin flag, which only admins may set."""

    is_admin: UpdateBool = None


def to_public(user: User) -> UserPublic:
    """Strip the password hash from a stored user."""
    return UserPublic.model_validate(user.model_dump(exclude={"password_hash"}))
