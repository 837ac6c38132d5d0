# app/models/__init__.py
"""
Database models module initialization.
Exports all database models for convenient imports throughout the application.

Models exported:
- Account: Credentials and access-control flags
- Profile: Display data, one-to-one with Account
"""
from .account import Account
from .profile import Profile
