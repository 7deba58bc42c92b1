from sqlmodel import SQLModel, Field
from sqlalchemy import Column, String
from typing import Optional

class User(SQLModel, table=True):
    # Ids of deleted users are never handed out again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(sa_column=Column(String(100), nullable=False))
    email: str = Field(sa_column=Column(String(255), unique=True, nullable=False))
    password: str = Field(sa_column=Column(String(255), nullable=False))
