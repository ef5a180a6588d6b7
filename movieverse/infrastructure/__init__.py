"""
Infrastructure (persistance SQLModel).
"""
