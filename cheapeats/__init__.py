"""
CheapEats ranking service.

Responsibilities:
- Enforce user-declared hard filters on candidate restaurants.
- Score and order candidates by value, transit proximity and rating.
- Explain each pick with short reason tags and phrases.
- Assemble primary/backup lunch route plans from the ranked list.
"""
