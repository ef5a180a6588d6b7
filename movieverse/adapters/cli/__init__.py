"""
Commandes CLI de MovieVerse (typer + rich).
"""
