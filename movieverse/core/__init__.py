"""
Couche domaine (core).

Contient les entités métier, ports (interfaces abstraites), la taxonomie
d'erreurs et la résolution des catégories.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, frameworks, BDD).

Sous-packages :
- entities/ : Entités métier (Movie, Review, WatchlistEntry)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
"""
