"""Starter catalog imported into an empty store."""

from typing import TYPE_CHECKING, List

from loguru import logger

from mediacatalog.config.settings import DEFAULT_CATEGORY_NAMES, VIDEO_TYPE_PHOTOS
from mediacatalog.models.category import CategorySettings
from mediacatalog.models.video import Video

if TYPE_CHECKING:
    from mediacatalog.catalog.store import CatalogStore

SAMPLE_VIDEOS: List[dict] = [
    {
        "title": "Simplification Tricks for Bank Exams",
        "url": "https://www.youtube.com/watch?v=8ZK_S-46KwE",
        "category": "aptitude",
        "description": "Shortcuts for BODMAS and approximation questions.",
    },
    {
        "title": "Percentage Problems Made Easy",
        "url": "https://www.youtube.com/watch?v=JeVSmq1Nrpw",
        "category": "aptitude",
    },
    {
        "title": "Syllogism Basics",
        "url": "https://www.youtube.com/watch?v=zv6tfiYwOyE",
        "category": "reasoning",
        "description": "Venn diagram method for syllogism questions.",
    },
    {
        "title": "Seating Arrangement Puzzles",
        "url": "https://www.youtube.com/watch?v=2Mq9AcvwxmU",
        "category": "reasoning",
    },
    {
        "title": "Reading Comprehension Strategies",
        "url": "https://www.youtube.com/watch?v=0FzQtqQ_Yd8",
        "category": "english",
    },
    {
        "title": "Error Spotting Practice Notes",
        "url": "https://photos.app.goo.gl/4mXg8kzQ7sJpT1aB9",
        "category": "english",
        "video_type": VIDEO_TYPE_PHOTOS,
        "description": "Handwritten notes on common grammar errors.",
    },
]


def ensure_default_categories(store: "CatalogStore") -> List[CategorySettings]:
    """Create the default categories if the store has none."""
    return store.categories.ensure_defaults(DEFAULT_CATEGORY_NAMES)


def seed_if_empty(store: "CatalogStore") -> bool:
    """
    Import the starter catalog into an empty store.

    Categories are created first so every sample video lands in an
    existing category.

    Args:
        store: Catalog to seed.

    Returns:
        True if sample videos were imported, False if the store already
        held videos.
    """
    with store.lock:
        ensure_default_categories(store)
        if not store.is_empty():
            return False

        with store.substrate.batch():
            for sample in SAMPLE_VIDEOS:
                store.videos.add(Video(**sample))
        logger.info(f"Imported {len(SAMPLE_VIDEOS)} sample videos")
        return True
