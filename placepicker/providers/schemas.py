from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional, Union

# Upstream payload shapes. Only the fields the normalizer reads are declared;
# everything else Nominatim sends is ignored.


class GeoJsonGeometry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: str
    coordinates: Any = None


class FeatureProperties(BaseModel):
    model_config = ConfigDict(extra="ignore")

    display_name: Optional[str] = None
    name: Optional[str] = None
    addresstype: Optional[str] = None
    category: Optional[str] = None
    type: Optional[str] = None
    address: Dict[str, Any] = Field(default_factory=dict)


class Feature(BaseModel):
    model_config = ConfigDict(extra="ignore")

    properties: FeatureProperties = Field(default_factory=FeatureProperties)
    geometry: Optional[GeoJsonGeometry] = None
    bbox: Optional[List[float]] = None


class FeatureCollection(BaseModel):
    model_config = ConfigDict(extra="ignore")

    features: List[Dict[str, Any]] = Field(default_factory=list)


class AddressRecord(BaseModel):
    """Flat `format=json` record: coordinates and bounding box as decimal strings."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    lat: Optional[Union[str, float]] = None
    lon: Optional[Union[str, float]] = None
    display_name: Optional[str] = None
    name: Optional[str] = None
    addresstype: Optional[str] = None
    category: Optional[str] = None
    osm_class: Optional[str] = Field(default=None, alias="class")
    type: Optional[str] = None
    address: Dict[str, Any] = Field(default_factory=dict)
    boundingbox: Optional[List[Union[str, float]]] = None
    geojson: Optional[GeoJsonGeometry] = None
