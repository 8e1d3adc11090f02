"""
Site Content Module

Events, FAQs, the image gallery and customer testimonials shown on the
public site. Reads are public; writes need an operator token. The gallery
is a single stored list of image URLs.
"""

from .router import router
from .service import ContentService

__all__ = [
    "router",
    "ContentService"
]
