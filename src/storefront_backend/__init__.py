"""Storefront backend: products, reviews, categories, companies and users."""

__version__ = "0.1.0"
