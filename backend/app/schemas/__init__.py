# app/schemas/__init__.py
"""
Request and response models for the board API.
"""
from .auth import *
from .idea import *
from .admin import *
