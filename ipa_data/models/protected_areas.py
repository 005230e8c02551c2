"""Pydantic models for Indigenous Protected Areas."""

from typing import Dict, Optional

from pydantic import BaseModel, Field


class ProtectedArea(BaseModel):
    """Normalized Indigenous Protected Area record.

    ``id`` is the feature's position in the loaded collection, so it is only
    meaningful within one loaded dataset. ``source_id`` carries the service's
    own object identifier when one is provided.
    """

    id: int = Field(..., description="Position of the feature in the collection", ge=0)
    source_id: Optional[int] = Field(None, description="Service object identifier")
    name: str = Field(..., description="Area name")
    state: str = Field(..., description="State/territory code")
    type: str = Field(..., description="Classification label")
    managing_body: str = Field(..., description="Managing authority label")
    lat: Optional[float] = Field(None, description="Latitude", ge=-90, le=90)
    lng: Optional[float] = Field(None, description="Longitude", ge=-180, le=180)
    distance_km: Optional[float] = Field(
        None, description="Distance from a searched town in km", ge=0
    )
    data_source: str = Field(
        default="DCCEEW Indigenous Protected Areas", description="Data source"
    )

    class Config:
        """Pydantic config."""

        frozen = True
        json_schema_extra = {
            "example": {
                "id": 0,
                "name": "Ngunya Jargoon IPA",
                "state": "NSW",
                "type": "Dedicated",
                "managing_body": "Local Aboriginal Land Council (LALC)",
                "lat": -28.95,
                "lng": 153.35,
            }
        }

    @property
    def has_coordinates(self) -> bool:
        """Whether the area can be placed on the map."""
        return self.lat is not None and self.lng is not None

    def with_distance(self, distance_km: float) -> "ProtectedArea":
        """Return a copy annotated with a distance from a searched town."""
        return self.model_copy(update={"distance_km": distance_km})

    def to_geojson_feature(self) -> Dict:
        """Convert to a GeoJSON Point Feature.

        Returns:
            GeoJSON Feature dictionary (geometry is None without coordinates)
        """
        geometry = None
        if self.has_coordinates:
            geometry = {"type": "Point", "coordinates": [self.lng, self.lat]}

        return {
            "type": "Feature",
            "id": self.id,
            "geometry": geometry,
            "properties": {
                "source_id": self.source_id,
                "name": self.name,
                "state": self.state,
                "type": self.type,
                "managing_body": self.managing_body,
                "distance_km": self.distance_km,
                "data_source": self.data_source,
            },
        }
