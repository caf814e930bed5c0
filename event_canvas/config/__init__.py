"""Physical sizes and batch layout profiles"""

from event_canvas.config.sizes import PAGE_SIZES, CARD_SIZES, MM, oriented, page_size
from event_canvas.config.profiles import BatchProfile, PROFILES, DEFAULT_PROFILE_FOR_KIND, get_profile

__all__ = [
    "PAGE_SIZES",
    "CARD_SIZES",
    "MM",
    "oriented",
    "page_size",
    "BatchProfile",
    "PROFILES",
    "DEFAULT_PROFILE_FOR_KIND",
    "get_profile",
]
