"""
Utility modules for the practice-time backend.
"""
