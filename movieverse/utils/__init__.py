"""
Utilitaires partages (constantes).
"""
