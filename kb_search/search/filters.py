"""Collection browsing helpers: category/tag filters and facet listings."""

from typing import Iterable, List, Optional, Sequence

from ..models import Guide


def filter_by_category(guides: Sequence[Guide], category: Optional[str]) -> List[Guide]:
    """Guides whose category equals `category` (case-insensitive). Empty category keeps all."""
    guides = list(guides or [])
    if not category:
        return guides
    wanted = category.lower()
    return [g for g in guides if g.category and g.category.lower() == wanted]


def filter_by_tags(guides: Sequence[Guide], tags: Optional[Iterable[str]]) -> List[Guide]:
    """Guides carrying any of `tags` (case-insensitive). Empty tags keeps all."""
    guides = list(guides or [])
    wanted = {tag.lower() for tag in (tags or []) if tag}
    if not wanted:
        return guides
    return [g for g in guides if any(tag.lower() in wanted for tag in g.tags)]


def get_categories(guides: Sequence[Guide]) -> List[str]:
    """Sorted unique categories"""
    return sorted({g.category for g in guides or [] if g.category})


def get_tags(guides: Sequence[Guide]) -> List[str]:
    """Sorted unique tags"""
    return sorted({tag for g in guides or [] for tag in g.tags})
