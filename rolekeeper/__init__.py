"""
Role and permission management on top of SQLAlchemy.
"""

__version__ = "1.0.0"
