# services/search.py
"""
Client-side refinement of already-fetched listings.

Runs in memory on top of whatever the data-access layer returned, so it
composes with any server-side filter without another store round trip.
"""
from typing import Sequence, TypeVar

T = TypeVar("T")

SEARCH_FIELDS = ("title", "address", "description")


def refine_properties(properties: Sequence[T], query: str) -> list[T]:
     """
     Keep the properties whose title, address or description contains query.

     Matching is a case-insensitive substring test on the trimmed query.
     A blank query returns every property, in the original order.
     """
     needle = (query or "").strip().casefold()
     if not needle:
          return list(properties)

     return [
          prop for prop in properties
          if any(needle in (getattr(prop, field, None) or "").casefold() for field in SEARCH_FIELDS)
     ]
