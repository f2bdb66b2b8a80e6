"""
Reaction panels
Task ID: R2

Embeds that react to the authorized user's emoji reactions.
"""

from .interactive_embed import InteractiveEmbed
from .paginated_embed import PaginatedEmbed, next_index, previous_index

__all__ = [
    'InteractiveEmbed',
    'PaginatedEmbed',
    'next_index',
    'previous_index',
]
