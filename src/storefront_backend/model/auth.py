from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class User(Base):
    __tablename__ = 'user'

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False)

    # Argon2 hash, never the plain password
    password = Column(String(255), nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    company = relationship('Company', back_populates='user', uselist=False)
    reviews = relationship('Review', back_populates='user')

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
