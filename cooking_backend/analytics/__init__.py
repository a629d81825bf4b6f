"""
Usage analytics.

Responsibilities:
- Record search and recipe-skip events in memory.
- Summarise them for the /analytics endpoint.
"""
