"""String helpers shared by request builders and user messages."""
from typing import List


def format_list(items: List[str], separator: str = ",") -> str:
    """Join display names the way request contexts read: ``A``, ``A and B``, ``A, B and C``."""
    items = [item for item in items if item]
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    head = f"{separator} ".join(items[:-1])
    return f"{head} and {items[-1]}"
