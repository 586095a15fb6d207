from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class Review(Base):
    __tablename__ = 'review'
    __table_args__ = (
        CheckConstraint('rating BETWEEN 1 AND 5', name='ck_review_rating_range'),
        Index('idx_review_product_created', 'product_id', 'created_at'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, ForeignKey('product.id', ondelete='CASCADE'), nullable=False)

    # Author; the only user allowed to change or delete the review
    user_id = Column(Integer, ForeignKey('user.id', ondelete='CASCADE'), nullable=False)

    rating = Column(Integer, nullable=False)
    text = Column(Text)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    product = relationship('Product', back_populates='reviews')
    user = relationship('User', back_populates='reviews')

    def __repr__(self):
        return f"<Review(id={self.id}, product_id={self.product_id}, user_id={self.user_id})>"
