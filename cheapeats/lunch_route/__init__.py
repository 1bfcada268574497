"""
Lunch route planning.

Responsibilities:
- Turn a ranked restaurant list into a primary pick and a backup.
- Attach walking ETAs and "why this pick" reasons to each pick.
"""
