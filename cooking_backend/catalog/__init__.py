"""
Product and recipe catalog.

Responsibilities:
- Load the seed catalog from the packaged CSV files.
- Hold products and recipes in memory as read-only snapshots.
- Provide admin create / update / delete operations.
- Hand the approved recipe list to the recommendation engine.
"""
