"""
Marketplace rules: search filtering, availability and pricing.
"""

from .filters import apply_filters, matches_filters, paginate
from .availability import ranges_overlap, find_conflicts, check_availability
from .pricing import count_nights, total_price, quote

__all__ = [
    'apply_filters', 'matches_filters', 'paginate',
    'ranges_overlap', 'find_conflicts', 'check_availability',
    'count_nights', 'total_price', 'quote'
]
