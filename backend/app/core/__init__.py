# app/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: Startup checks for sign-in configuration
- db: Database configuration and connection management
- errors: Error taxonomy and HTTP error responses
- security: Session tokens and OAuth state handling
"""
