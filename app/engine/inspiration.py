"""Curated ideas and quotes for users looking for their next goal."""
from enum import Enum
from typing import Optional, Sequence

from pydantic import BaseModel

from app.engine.listing import collation_key
from app.models.bucket_item import BucketItem, BucketItemCreate, Priority


class Difficulty(str, Enum):
    """How much effort an idea takes."""

    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


DIFFICULTY_PRIORITY = {
    Difficulty.EASY: Priority.LOW,
    Difficulty.MEDIUM: Priority.MEDIUM,
    Difficulty.HARD: Priority.HIGH,
}


class InspirationIdea(BaseModel):
    """A suggested bucket list item."""

    title: str
    category: str
    difficulty: Difficulty

    @property
    def priority(self) -> Priority:
        return DIFFICULTY_PRIORITY[self.difficulty]


class Quote(BaseModel):
    quote: str
    author: str


class InspirationReport(BaseModel):
    """Quote of the day plus the ideas left to pick from."""

    quote: Quote
    categories: list[str]
    ideas: list[InspirationIdea]


def _ideas(category: str, *entries: tuple[str, str]) -> tuple[InspirationIdea, ...]:
    return tuple(
        InspirationIdea(title=title, category=category, difficulty=difficulty)
        for title, difficulty in entries
    )


# Keyed by short tab name, in display order.
INSPIRATION_IDEAS: dict[str, tuple[InspirationIdea, ...]] = {
    "travel": _ideas(
        "Travel",
        ("Visit the Northern Lights in Iceland", "Medium"),
        ("Take a hot air balloon ride over Cappadocia", "Medium"),
        ("Road trip along Route 66", "Medium"),
        ("Hike the Inca Trail to Machu Picchu", "Hard"),
        ("Stay in an overwater bungalow in the Maldives", "Hard"),
        ("Visit all seven continents", "Hard"),
    ),
    "adventure": _ideas(
        "Adventure",
        ("Go skydiving", "Medium"),
        ("Learn to scuba dive", "Medium"),
        ("Go bungee jumping", "Medium"),
        ("Climb a mountain peak", "Hard"),
        ("Go white water rafting", "Medium"),
        ("Try paragliding", "Medium"),
    ),
    "personal": _ideas(
        "Personal Growth",
        ("Learn a new language", "Hard"),
        ("Run a marathon", "Hard"),
        ("Write a book", "Hard"),
        ("Learn to play a musical instrument", "Medium"),
        ("Start a meditation practice", "Easy"),
        ("Take a cooking class", "Easy"),
    ),
    "career": _ideas(
        "Career",
        ("Start your own business", "Hard"),
        ("Give a TED talk", "Hard"),
        ("Get a promotion", "Medium"),
        ("Learn a new skill that advances your career", "Medium"),
        ("Mentor someone in your field", "Easy"),
        ("Network with industry leaders", "Medium"),
    ),
    "relationships": _ideas(
        "Relationships",
        ("Volunteer for a cause you care about", "Easy"),
        ("Host a dinner party for friends", "Easy"),
        ("Reconnect with old friends", "Easy"),
        ("Take a family vacation", "Medium"),
        ("Write letters to loved ones", "Easy"),
        ("Learn the love language of your partner", "Easy"),
    ),
    "creative": _ideas(
        "Creativity",
        ("Paint a picture", "Easy"),
        ("Take a photography course", "Medium"),
        ("Write poetry", "Easy"),
        ("Learn to dance", "Medium"),
        ("Create a short film", "Hard"),
        ("Design and build something with your hands", "Medium"),
    ),
}

INSPIRATIONAL_QUOTES: tuple[Quote, ...] = (
    Quote(quote="The biggest adventure you can take is to live the life of your dreams.", author="Oprah Winfrey"),
    Quote(quote="Don't be pushed around by the fears in your mind. Be led by the dreams in your heart.", author="Roy T. Bennett"),
    Quote(quote="You are never too old to set another goal or to dream a new dream.", author="C.S. Lewis"),
    Quote(quote="All our dreams can come true, if we have the courage to pursue them.", author="Walt Disney"),
    Quote(quote="The future belongs to those who believe in the beauty of their dreams.", author="Eleanor Roosevelt"),
    Quote(quote="A goal is a dream with a deadline.", author="Napoleon Hill"),
    Quote(quote="Dreams don't work unless you do.", author="John C. Maxwell"),
    Quote(quote="Your time is limited, don't waste it living someone else's life.", author="Steve Jobs"),
)


def inspiration_categories() -> list[str]:
    """Category names that have ideas, in display order."""
    return [ideas[0].category for ideas in INSPIRATION_IDEAS.values()]


def ideas_for_category(category: Optional[str] = None) -> list[InspirationIdea]:
    """
    Ideas for one category, or every idea when no category is given.

    The category may be the tab name ("personal") or the item category
    ("Personal Growth"), in any case. Unknown categories have no ideas.
    """
    if not category:
        return [idea for ideas in INSPIRATION_IDEAS.values() for idea in ideas]

    wanted = category.strip().lower()
    for key, ideas in INSPIRATION_IDEAS.items():
        if wanted == key or wanted == ideas[0].category.lower():
            return list(ideas)
    return []


def suggest_ideas(
    records: Sequence[BucketItem],
    category: Optional[str] = None,
) -> list[InspirationIdea]:
    """
    Ideas the user has not already put on their list.

    Args:
        records: Snapshot of one owner's items
        category: Optional category filter, see ideas_for_category

    Returns:
        Catalog ideas whose titles match no existing item, ignoring case
        and accents
    """
    taken = {collation_key(item.title) for item in records}
    return [idea for idea in ideas_for_category(category) if collation_key(idea.title) not in taken]


def find_idea(title: str) -> Optional[InspirationIdea]:
    """Catalog idea with this title, ignoring case and accents."""
    key = collation_key(title)
    for idea in ideas_for_category():
        if collation_key(idea.title) == key:
            return idea
    return None


def quote_of_the_day(seed: int) -> Quote:
    """Pick a quote; the same seed always gives the same quote."""
    return INSPIRATIONAL_QUOTES[seed % len(INSPIRATIONAL_QUOTES)]


def idea_to_item(idea: InspirationIdea) -> BucketItemCreate:
    """New item for an idea; harder ideas get a higher priority."""
    return BucketItemCreate(
        title=idea.title,
        category=idea.category,
        priority=idea.priority,
    )
