# user.py
from sqlalchemy import Column, DateTime, Integer, JSON, String, Text
from sqlalchemy.sql import func
from devmatch.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=True)
    name = Column(String(255), nullable=False)
    image = Column(String(1024), nullable=False, default="")
    bio = Column(Text, nullable=False, default="")
    title = Column(String(255), nullable=False, default="")

    # Free-text skill labels, case-sensitive: list[str]
    skills = Column(JSON, nullable=False, default=list)

    # {github, linkedin, portfolio, twitter}
    links = Column(JSON, nullable=False, default=dict)

    account_type = Column(String(32), nullable=False, default="credentials")
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
