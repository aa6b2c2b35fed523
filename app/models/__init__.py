"""
Database models package
"""

from .thread_document import ThreadDocument

__all__ = ["ThreadDocument"]
