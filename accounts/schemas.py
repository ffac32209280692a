"""
Schemas for account endpoints: login, tokens and admin-managed accounts.
"""

from ninja import Field, Schema
from pydantic import field_validator

from common.config import ValidationConfig
from common.schemas import check_email, check_pattern


class LoginRequest(Schema):
    email: str = Field(..., min_length=1, description='Email')
    password: str = Field(..., min_length=1, description='Password')


class UserInfo(Schema):
    """Public representation of an account."""
    user_id: str
    email: str
    first_name: str
    last_name: str
    contact: str = ''
    profile_pic: str = ''
    user_type: str


class TokenPairResponse(Schema):
    success: bool = True
    message: str = 'Login successful'
    access_token: str
    refresh_token: str
    user: UserInfo


class RefreshRequest(Schema):
    refresh: str


class RefreshResponse(Schema):
    success: bool = True
    access_token: str


class UserResponse(Schema):
    success: bool
    user: UserInfo | None = None
    message: str | None = None


class AccountCreateRequest(Schema):
    email: str
    password: str = Field(..., min_length=ValidationConfig.MIN_PASSWORD_LENGTH)
    first_name: str
    last_name: str
    contact: str = ''
    profile_pic: str = ''

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return check_email(value)

    @field_validator('first_name', 'last_name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        return check_pattern(value.strip(), ValidationConfig.NAME_REGEX, 'Invalid name')

    @field_validator('contact')
    @classmethod
    def validate_contact(cls, value: str) -> str:
        if not value:
            return value
        return check_pattern(value, ValidationConfig.CONTACT_REGEX, 'Invalid contact number')


class AccountUpdateItem(Schema):
    """One account update, addressed by email."""
    email: str
    first_name: str | None = None
    last_name: str | None = None
    contact: str | None = None
    profile_pic: str | None = None
    password: str | None = Field(None, min_length=ValidationConfig.MIN_PASSWORD_LENGTH)

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return check_email(value)

    @field_validator('first_name', 'last_name')
    @classmethod
    def validate_name(cls, value: str | None) -> str | None:
        if value is None:
            return value
        return check_pattern(value.strip(), ValidationConfig.NAME_REGEX, 'Invalid name')

    @field_validator('contact')
    @classmethod
    def validate_contact(cls, value: str | None) -> str | None:
        if not value:
            return value
        return check_pattern(value, ValidationConfig.CONTACT_REGEX, 'Invalid contact number')


class AccountBulkUpdateRequest(Schema):
    updates: list[AccountUpdateItem]


class AccountResponse(Schema):
    success: bool
    message: str
    user: UserInfo


class AccountListUpdateResponse(Schema):
    success: bool
    message: str
    users: list[UserInfo]
    not_found: list[str] = []


class EmailListRequest(Schema):
    emails: list[str]


class AccountDeleteResponse(Schema):
    success: bool
    message: str
    deleted_count: int
    not_found: list[str] = []
    cascade: dict[str, int] = {}
