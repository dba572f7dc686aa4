"""Catalog models for product, nature and plant pages"""

from pydantic import BaseModel, Field
from typing import Optional


class ProductImage(BaseModel):
    """Image attached to a product or nature"""
    url: str
    alt: str = ""
    is_primary: bool = Field(default=False, alias="isPrimary")

    class Config:
        populate_by_name = True


class Brochure(BaseModel):
    """Downloadable product document"""
    url: str
    title: str = "Brochure"


class PlantRef(BaseModel):
    """Plant reference embedded in a product"""
    id: Optional[str] = Field(default=None, alias="_id")
    name: Optional[str] = None
    certifications: list[str] = Field(default_factory=list)

    class Config:
        populate_by_name = True


class NatureRef(BaseModel):
    """Nature reference embedded in a product"""
    id: Optional[str] = Field(default=None, alias="_id")
    name: Optional[str] = None

    class Config:
        populate_by_name = True


class PlantAvailability(BaseModel):
    """A state where the product is available"""
    state: str


class Product(BaseModel):
    """Product in the catalog"""
    id: Optional[str] = Field(default=None, alias="_id")
    name: str
    description: Optional[str] = None
    short_description: Optional[str] = Field(default=None, alias="shortDescription")
    category: Optional[str] = None
    certification: Optional[str] = None
    images: list[ProductImage] = Field(default_factory=list)
    brochure: Optional[Brochure] = None
    plant: Optional[PlantRef] = Field(default=None, alias="plantId")
    nature: Optional[NatureRef] = Field(default=None, alias="natureId")
    plant_names: list[str] = Field(default_factory=list, alias="plantNames")
    plant_availability: list[PlantAvailability] = Field(default_factory=list, alias="plantAvailability")

    class Config:
        populate_by_name = True

    @property
    def primary_image(self) -> Optional[ProductImage]:
        """Image flagged primary, else the first image"""
        for image in self.images:
            if image.is_primary:
                return image
        return self.images[0] if self.images else None

    @property
    def states(self) -> list[str]:
        return [entry.state for entry in self.plant_availability]


class Nature(BaseModel):
    """Product subtype within a category"""
    id: str = Field(alias="_id")
    name: str
    description: str = ""
    technical_overview: str = Field(default="", alias="technicalOverview")
    key_features: list[str] = Field(default_factory=list, alias="keyFeatures")
    applications: list[str] = Field(default_factory=list)
    image: list[ProductImage] = Field(default_factory=list)
    plant: Optional[PlantRef] = Field(default=None, alias="plantId")
    product_count: int = Field(default=0, alias="productCount")

    class Config:
        populate_by_name = True


class TopNature(BaseModel):
    """Nature summary within plant statistics"""
    id: str = Field(alias="_id")
    name: str
    product_count: int = Field(default=0, alias="productCount")

    class Config:
        populate_by_name = True


class PlantWithStats(BaseModel):
    """Plant with aggregate product statistics"""
    id: str = Field(alias="_id")
    name: str
    description: str = ""
    total_product_count: int = Field(default=0, alias="totalProductCount")
    top_natures: list[TopNature] = Field(default_factory=list, alias="topNatures")

    class Config:
        populate_by_name = True


class PlantProduct(BaseModel):
    """Product availability line for a plant"""
    name: str
    status: str = ""
    quantity: str = ""


class Plant(BaseModel):
    """Manufacturing plant with its products"""
    id: str = Field(alias="_id")
    name: str
    slug: str = ""
    description: str = ""
    capacity: str = ""
    location: str = ""
    established: str = ""
    machinery: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    is_active: bool = Field(default=True, alias="isActive")
    products: list[PlantProduct] = Field(default_factory=list)

    class Config:
        populate_by_name = True
