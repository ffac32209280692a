"""
Account Models - Admins, project managers and team members.

All three roles share one table keyed by email; ``user_type`` decides the
role and the identifier prefix (``Admin-00001`` vs ``User-00001``).
"""

from django.contrib.auth.base_user import BaseUserManager
from django.contrib.auth.models import AbstractUser
from django.core.validators import RegexValidator
from django.db import models

from common.config import IdentifierConfig, ValidationConfig
from common.models import BusinessIdMixin


class UserManager(BaseUserManager):
    """Manager creating users with email as the login name."""

    use_in_migrations = True

    def _create_user(self, email, password, **extra_fields):
        if not email:
            raise ValueError('Email is required')
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_user(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', False)
        extra_fields.setdefault('is_superuser', False)
        extra_fields.setdefault('user_type', User.TYPE_USER)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('user_type', User.TYPE_ADMIN)
        return self._create_user(email, password, **extra_fields)


class RoleManager(UserManager):
    """User manager restricted to a single ``user_type``."""

    use_in_migrations = False

    def __init__(self, user_type: str):
        super().__init__()
        self.user_type = user_type

    def get_queryset(self):
        return super().get_queryset().filter(user_type=self.user_type)

    def create_user(self, email, password=None, **extra_fields):
        extra_fields['user_type'] = self.user_type
        return super().create_user(email, password, **extra_fields)


name_validator = RegexValidator(ValidationConfig.NAME_REGEX, 'Invalid name')
contact_validator = RegexValidator(ValidationConfig.CONTACT_REGEX, 'Invalid contact number')


class User(BusinessIdMixin, AbstractUser):
    """Account of any role."""

    TYPE_ADMIN = 'Admin'
    TYPE_PROJECT_MANAGER = 'ProjectManager'
    TYPE_USER = 'User'

    USER_TYPE_CHOICES = [
        (TYPE_ADMIN, 'Admin'),
        (TYPE_PROJECT_MANAGER, 'Project Manager'),
        (TYPE_USER, 'User'),
    ]

    business_id_field = 'user_id'

    username = None
    user_id = models.CharField(
        max_length=IdentifierConfig.MAX_LENGTH,
        unique=True,
        editable=False,
        verbose_name='User ID',
    )
    email = models.EmailField(
        unique=True,
        verbose_name='Email',
    )
    first_name = models.CharField(
        max_length=150,
        validators=[name_validator],
        verbose_name='First name',
    )
    last_name = models.CharField(
        max_length=150,
        validators=[name_validator],
        verbose_name='Last name',
    )
    contact = models.CharField(
        max_length=32,
        blank=True,
        validators=[contact_validator],
        verbose_name='Contact',
    )
    profile_pic = models.CharField(
        max_length=500,
        blank=True,
        verbose_name='Profile picture',
    )
    user_type = models.CharField(
        max_length=20,
        choices=USER_TYPE_CHOICES,
        default=TYPE_USER,
        db_index=True,
        verbose_name='User type',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['first_name', 'last_name']

    objects = UserManager()

    class Meta:
        db_table = 'accounts_users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['user_id']

    def __str__(self) -> str:
        return f'{self.user_id} {self.email} ({self.user_type})'

    def save(self, *args, **kwargs):
        if self.email:
            self.email = self.email.strip().lower()
        super().save(*args, **kwargs)

    def get_business_id_prefix(self) -> str:
        if self.user_type == self.TYPE_ADMIN:
            return IdentifierConfig.ADMIN_PREFIX
        return IdentifierConfig.USER_PREFIX

    def to_dict(self) -> dict:
        return {
            'user_id': self.user_id,
            'email': self.email,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'contact': self.contact,
            'profile_pic': self.profile_pic,
            'user_type': self.user_type,
        }


class Admin(User):
    """Administrators managing project managers and users."""

    objects = RoleManager(User.TYPE_ADMIN)

    class Meta:
        proxy = True
        verbose_name = 'Admin'
        verbose_name_plural = 'Admins'


class ProjectManager(User):
    """Project managers owning projects and teams."""

    objects = RoleManager(User.TYPE_PROJECT_MANAGER)

    class Meta:
        proxy = True
        verbose_name = 'Project manager'
        verbose_name_plural = 'Project managers'
