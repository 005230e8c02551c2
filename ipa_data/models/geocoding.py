"""Pydantic models for geocoding results."""

from typing import Dict

from pydantic import BaseModel, Field


class GeocodedPlace(BaseModel):
    """Best match for a town/locality search."""

    display_name: str = Field(..., description="Full place name from the geocoder")
    lat: float = Field(..., description="Latitude", ge=-90, le=90)
    lng: float = Field(..., description="Longitude", ge=-180, le=180)

    class Config:
        """Pydantic config."""

        frozen = True
        json_schema_extra = {
            "example": {
                "display_name": "Dubbo, Dubbo Regional Council, New South Wales, Australia",
                "lat": -32.2569,
                "lng": 148.6011,
            }
        }

    def to_geojson_feature(self) -> Dict:
        """Convert to GeoJSON Feature."""
        return {
            "type": "Feature",
            "geometry": {"type": "Point", "coordinates": [self.lng, self.lat]},
            "properties": {"display_name": self.display_name},
        }
