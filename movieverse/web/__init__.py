"""
Interface web JSON de MovieVerse (FastAPI).
"""
