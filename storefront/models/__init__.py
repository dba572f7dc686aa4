# Storefront Models

from .catalog import (
    Product,
    ProductImage,
    Brochure,
    Nature,
    Plant,
    PlantProduct,
    PlantWithStats,
    TopNature,
)
from .blog import Blog
from .leads import QuoteForm, InquiryForm, SubscribeForm

__all__ = [
    "Product",
    "ProductImage",
    "Brochure",
    "Nature",
    "Plant",
    "PlantProduct",
    "PlantWithStats",
    "TopNature",
    "Blog",
    "QuoteForm",
    "InquiryForm",
    "SubscribeForm",
]
