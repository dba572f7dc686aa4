"""Blog models"""

from pydantic import BaseModel, Field
from typing import Optional

# Category filter shown on the blog page; "All" means no filter
BLOG_CATEGORIES = (
    "All",
    "Technical Guide",
    "Application",
    "Product Innovation",
    "Sustainability",
    "Quality Assurance",
    "Case Study",
)


class Blog(BaseModel):
    """Blog post"""
    id: str = Field(alias="_id")
    title: str
    slug: str
    excerpt: str = ""
    description: str = ""
    content: str = ""
    category: str = ""
    author: str = ""
    read_time: str = Field(default="", alias="readTime")
    featured: bool = False
    tags: list[str] = Field(default_factory=list)
    image: Optional[str] = None
    seo_title: str = Field(default="", alias="seoTitle")
    seo_description: str = Field(default="", alias="seoDescription")
    seo_keywords: list[str] = Field(default_factory=list, alias="seoKeywords")
    created_at: Optional[str] = Field(default=None, alias="createdAt")

    class Config:
        populate_by_name = True
