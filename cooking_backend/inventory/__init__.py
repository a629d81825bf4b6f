"""
Per-user kitchen inventory.

Responsibilities:
- Track the products each user has at home.
- Track products the user never wants to see (allergies, dislikes).
- Track favorite recipes.
- Freeze owned / excluded ids into a snapshot for the ranking engine.
"""
