from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String

from formcheck.core.database import Base
from formcheck.models.records import SqlRecordStore


class User(Base):
    """Account whose username and email must stay unique"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class UserStore(SqlRecordStore):
    model = User
