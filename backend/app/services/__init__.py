"""
Services Module

Business operations used by the routers:
- accounts: account creation with profile provisioning, login, updates,
  profile lookup
"""
