"""
Pantry-based recipe recommendation service.

Responsibilities:
- Keep the product and recipe catalog.
- Track each user's pantry, excluded products and favorite recipes.
- Score every approved recipe against the pantry and return a ranked list.
"""
