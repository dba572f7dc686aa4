"""
Product Category Registry

Single table mapping stable category keys to their plant id and the
display configuration (tagline, icon, filter groups) used by the catalog
pages. Pages look categories up by key, never by matching display names.
"""

from dataclasses import dataclass, field, replace
from typing import Optional


class CategoryNotFoundError(KeyError):
    """Raised when a category key is not in the registry"""
    pass


@dataclass(frozen=True)
class FilterGroup:
    """A titled group of filter options shown for a category"""
    title: str
    options: tuple[str, ...] = ()


@dataclass(frozen=True)
class CategoryConfig:
    """Display and lookup configuration for one product category"""
    key: str
    name: str
    tagline: str
    plant_id: str
    description: str = ""
    icon: str = "building"
    background_image: Optional[str] = None
    filters: tuple[FilterGroup, ...] = field(default_factory=tuple)


DEFAULT_CATEGORIES: tuple[CategoryConfig, ...] = (
    CategoryConfig(
        key="bitumen",
        name="Bitumen Solutions",
        tagline="Trusted Bitumen Technologies for Every Road",
        description=(
            "High-performance bitumen products for road construction, "
            "waterproofing and industrial applications."
        ),
        icon="building",
        background_image="https://www.constructionworld.in/assets/uploads/s_ae40e2939eb212f9b98fc628c69fbf5a.jpg",
        plant_id="68808208cf8dba209c5a0b1d",
        filters=(
            FilterGroup("Grade Type", ("CRMB", "PMB", "VG", "PG")),
            FilterGroup("Application", ("Road Construction", "Waterproofing", "Industrial")),
            FilterGroup("Packaging", ("50kg Drums", "200kg Drums", "Bulk")),
        ),
    ),
    CategoryConfig(
        key="gabion",
        name="Gabion Structures",
        tagline=(
            "Advanced epoxy adhesives, sealants, admixtures, curing compounds "
            "and waterproofing solutions."
        ),
        description=(
            "High-performance epoxy adhesives, sealants, admixtures and "
            "waterproofing solutions for construction."
        ),
        icon="shield",
        background_image="https://cdn.mos.cms.futurecdn.net/hFHLgTVFX6VJpwPDUzrEtL.jpg",
        plant_id="68808208cf8dba209c5a0b1e",
        filters=(
            FilterGroup("Product Type", ("Epoxy Adhesives", "Sealants", "Admixtures", "Gabion Structures")),
            FilterGroup("Application", ("Building Construction", "Waterproofing", "Repair")),
            FilterGroup("Packaging", ("5L Cans", "20L Drums", "200L Drums")),
        ),
    ),
    CategoryConfig(
        key="construct",
        name="Construction Chemicals",
        tagline=(
            "Engineered gabion mesh, boxes and rockfall netting systems for "
            "erosion control and stabilization."
        ),
        description=(
            "Engineered gabion mesh, boxes and rockfall netting systems for "
            "erosion control and stabilization."
        ),
        icon="beaker",
        background_image="https://backgroundimages.withfloats.com/actual/5bd1af4f3f02cc0001c0f035.jpg",
        plant_id="68808208cf8dba209c5a0b1f",
        filters=(
            FilterGroup("Product Type", ("Gabion Mesh", "Gabion Boxes", "Rockfall Netting")),
            FilterGroup("Application", ("Erosion Control", "Slope Stabilization", "Retaining Walls")),
            FilterGroup("Size", ("1m x 1m", "2m x 1m", "3m x 1m")),
        ),
    ),
)


class CategoryRegistry:
    """Lookup of category configuration by stable key"""

    def __init__(
        self,
        categories: tuple[CategoryConfig, ...] = DEFAULT_CATEGORIES,
        plant_id_overrides: Optional[dict[str, str]] = None,
    ):
        overrides = plant_id_overrides or {}
        self._categories: dict[str, CategoryConfig] = {}
        for category in categories:
            if category.key in overrides:
                category = replace(category, plant_id=overrides[category.key])
            self._categories[category.key] = category

    def get(self, key: Optional[str]) -> Optional[CategoryConfig]:
        """Get a category by key, or None"""
        if not key:
            return None
        return self._categories.get(key)

    def require(self, key: Optional[str]) -> CategoryConfig:
        """Get a category by key, raising if it is unknown"""
        category = self.get(key)
        if category is None:
            raise CategoryNotFoundError(key)
        return category

    def plant_id_for(self, key: Optional[str]) -> Optional[str]:
        """Resolve the plant id backing a category"""
        category = self.get(key)
        return category.plant_id if category else None

    def for_plant(self, plant_id: str) -> Optional[CategoryConfig]:
        """Find the category backed by a plant id"""
        for category in self._categories.values():
            if category.plant_id == plant_id:
                return category
        return None

    def all(self) -> list[CategoryConfig]:
        """All categories in display order"""
        return list(self._categories.values())

    def __contains__(self, key: object) -> bool:
        return key in self._categories
