"""
Adaptateurs (implementations concretes des ports).

- api/ : Client TMDB et cache des listes
- cli/ : Commandes Typer
"""
