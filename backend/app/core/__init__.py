# app/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: Application initialization and default admin creation
- db: Database configuration and connection management
- exceptions: Error kinds and the kind -> handler mapping
- renderers: Response envelope formatting
- security: Authentication, authorization, and password hashing
"""
