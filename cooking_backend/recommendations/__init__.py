"""
Recipe recommendation engine.

Responsibilities:
- Snapshot the user's owned and excluded products.
- Score every approved recipe against that snapshot.
- Rank the matches, drop recipes with nothing in common with the pantry.
- Return a size-limited list ready for API serialisation.
"""
