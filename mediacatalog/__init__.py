"""
Mediacatalog - Personal media-bookmark catalog.

Keeps references to externally hosted videos and photo collections:
- Videos with favorite flag, last-watched time and comments
- User-defined categories with a stable display order
- Playlists referencing videos by id
- A local key-value persistence layer that keeps all three consistent
"""

__version__ = "0.3.0"
