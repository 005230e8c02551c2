"""Pydantic models for raw IPA feature service responses.

The service returns GeoJSON when queried with ``f=geojson`` but features
exported through other ArcGIS paths carry Esri JSON polygons (``rings``).
Geometry is parsed into a tagged union at this boundary so the rest of the
package never inspects raw dictionaries.
"""

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator


class GeoJSONGeometry(BaseModel):
    """GeoJSON geometry with a nested ``coordinates`` array."""

    kind: Literal["geojson"] = "geojson"
    type: str = Field(..., description="GeoJSON geometry type")
    coordinates: Any = Field(..., description="Nested coordinate arrays")

    def to_geojson(self) -> Dict:
        return {"type": self.type, "coordinates": self.coordinates}


class EsriRingsGeometry(BaseModel):
    """Esri JSON polygon with a ``rings`` array."""

    kind: Literal["esri"] = "esri"
    rings: List[Any] = Field(..., description="Polygon rings of [x, y] pairs")

    def to_geojson(self) -> Dict:
        # Esri rings map onto a single GeoJSON polygon without ring orientation
        return {"type": "Polygon", "coordinates": self.rings}


class MissingGeometry(BaseModel):
    """Absent or unrecognised geometry."""

    kind: Literal["missing"] = "missing"

    def to_geojson(self) -> None:
        return None


Geometry = Union[GeoJSONGeometry, EsriRingsGeometry, MissingGeometry]


def parse_geometry(raw: Optional[Dict[str, Any]]) -> Geometry:
    """Classify a raw geometry dictionary.

    ``coordinates`` takes precedence over ``rings`` when both are present.

    Examples:
        >>> parse_geometry(None).kind
        'missing'
        >>> parse_geometry({"rings": [[[130.0, -12.0]]]}).kind
        'esri'
    """
    if isinstance(raw, (GeoJSONGeometry, EsriRingsGeometry, MissingGeometry)):
        return raw
    if not isinstance(raw, dict):
        return MissingGeometry()

    if raw.get("coordinates") is not None:
        return GeoJSONGeometry(
            type=str(raw.get("type") or "Unknown"),
            coordinates=raw["coordinates"],
        )
    if isinstance(raw.get("rings"), list):
        return EsriRingsGeometry(rings=raw["rings"])

    return MissingGeometry()


class IpaFeature(BaseModel):
    """One feature from the IPA service."""

    type: str = Field(default="Feature")
    id: Optional[Union[int, str]] = Field(None, description="Service feature id")
    properties: Dict[str, Any] = Field(default_factory=dict)
    geometry: Geometry = Field(default_factory=MissingGeometry)

    @field_validator("properties", mode="before")
    @classmethod
    def _null_properties(cls, value):
        return value if value is not None else {}

    @field_validator("geometry", mode="before")
    @classmethod
    def _classify_geometry(cls, value):
        return parse_geometry(value)


class IpaFeatureCollection(BaseModel):
    """The complete national IPA dataset as returned by the service."""

    type: str = Field(default="FeatureCollection")
    features: List[IpaFeature] = Field(default_factory=list)
