# core/formatting.py
from typing import Optional, Union

from core.models import CATEGORY_LABELS, Category

CATEGORY_COLOR_TOKENS = {
    Category.HIGH: "bg-red-100 text-red-800 border-red-200",
    Category.MEDIUM: "bg-amber-100 text-amber-800 border-amber-200",
    Category.LOW: "bg-green-100 text-green-800 border-green-200",
}
DEFAULT_COLOR_TOKEN = "bg-gray-100 text-gray-800 border-gray-200"

RANK_MEDALS = {1: "🥇", 2: "🥈", 3: "🥉"}


def format_score(score: float) -> str:
    """0.7345 -> '73.45%'"""
    return f"{score * 100:.2f}%"


def _resolve_category(value: Union[Category, str, None]) -> Optional[Category]:
    if isinstance(value, Category):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Category(value)
    except ValueError:
        pass
    for category, label in CATEGORY_LABELS.items():
        if label == value:
            return category
    return None


def category_color_token(category: Union[Category, str, None]) -> str:
    """CSS class token for a category badge. Accepts members, values or display labels."""
    resolved = _resolve_category(category)
    if resolved is None:
        return DEFAULT_COLOR_TOKEN
    return CATEGORY_COLOR_TOKENS[resolved]


def rank_medal(rank: int) -> str:
    return RANK_MEDALS.get(rank, str(rank))
