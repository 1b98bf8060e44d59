"""
Core utilities shared across the Castle Clothing API.

Configuration, logging, password hashing and the adapters for the external
services (Cloudinary image host, SMTP relay) live here so that routers and
services never import those libraries directly.
"""
