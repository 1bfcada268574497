"""
Sample restaurant catalog.

Responsibilities:
- Load the bundled demo/offline restaurant dataset from CSV.
- Convert tabular rows into validated ``Restaurant`` records.
"""
