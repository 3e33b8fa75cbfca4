"""Product model for the lawnmower catalog."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Product:
    """Product data model representing one catalog row in canonical form."""

    id: Any
    name: Optional[str]
    category: Optional[str]
    price: Optional[float]
    image_url: Optional[str]
    product_url: Optional[str]
    description: Optional[str]
    brand: Optional[str]
    power_source: Optional[str]
    drive_type: Optional[str]
    cutting_width_cm: Optional[float]
    has_rear_roller: Optional[bool]
    configuration: Optional[str]
    battery_system: Optional[str]
    ideal_for: Optional[str]
    best_feature: Optional[str]

    def to_api_dict(self) -> Dict[str, Any]:
        """Serialize with the camelCase keys the frontend expects."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "price": self.price,
            "imageUrl": self.image_url,
            "productUrl": self.product_url,
            "description": self.description,
            "brand": self.brand,
            "powerSource": self.power_source,
            "driveType": self.drive_type,
            "cuttingWidthCm": self.cutting_width_cm,
            "hasRearRoller": self.has_rear_roller,
            "configuration": self.configuration,
            "batterySystem": self.battery_system,
            "idealFor": self.ideal_for,
            "bestFeature": self.best_feature,
        }
