# Tables owned by the external auth provider. Only AuthSession is read by this
# service (session revocation check); the rest exist so the schema is complete.
from datetime import datetime
from typing import Optional
from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlmodel import SQLModel, Field

from taskboard.core.timeutil import utcnow


class AuthSession(SQLModel, table=True):
    __tablename__ = "session"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    token: str = Field(unique=True)
    expires_at: datetime = Field(sa_type=DateTime(timezone=True))
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    user_id: str = Field(
        sa_column=Column(
            String,
            ForeignKey("user.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class Account(SQLModel, table=True):
    __tablename__ = "account"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    account_id: str
    provider_id: str
    user_id: str = Field(
        sa_column=Column(
            String,
            ForeignKey("user.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        )
    )
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    id_token: Optional[str] = None
    access_token_expires_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    refresh_token_expires_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    scope: Optional[str] = None
    password: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class Verification(SQLModel, table=True):
    __tablename__ = "verification"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    identifier: str = Field(index=True)
    value: str
    expires_at: datetime = Field(sa_type=DateTime(timezone=True))
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
