"""
Catalog models: categories, companies and the products they sell.

A company belongs to exactly one user, its owner. Products belong to one
company and one category; only the company owner may change them.
"""

from sqlalchemy import (
    JSON, CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, Numeric, String, Text
)
from sqlalchemy.orm import relationship

from .base import Base, utcnow


class Category(Base):
    __tablename__ = 'category'

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)

    products = relationship('Product', back_populates='category')

    def __repr__(self):
        return f"<Category(id={self.id}, title='{self.title}')>"


class Company(Base):
    __tablename__ = 'company'

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)

    # One company per user
    user_id = Column(Integer, ForeignKey('user.id', ondelete='CASCADE'), unique=True, nullable=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship('User', back_populates='company')
    products = relationship('Product', back_populates='company')

    def __repr__(self):
        return f"<Company(id={self.id}, title='{self.title}', user_id={self.user_id})>"


class Product(Base):
    __tablename__ = 'product'
    __table_args__ = (
        CheckConstraint('price >= 0', name='ck_product_price_non_negative'),
        Index('idx_product_price', 'price'),
        Index('idx_product_category_id', 'category_id'),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    price = Column(Numeric(12, 2, asdecimal=False), nullable=False)

    category_id = Column(Integer, ForeignKey('category.id', ondelete='RESTRICT'), nullable=False)
    company_id = Column(Integer, ForeignKey('company.id', ondelete='CASCADE'), nullable=False)

    # Free-form product attributes (size, color, ...)
    attributes = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    category = relationship('Category', back_populates='products')
    company = relationship('Company', back_populates='products')
    reviews = relationship('Review', back_populates='product', passive_deletes=True)

    def __repr__(self):
        return f"<Product(id={self.id}, title='{self.title}', price={self.price})>"
