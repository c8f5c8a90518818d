# placepicker/providers/normalizer.py
"""
Conversion of Nominatim payloads into `Location`.

Two upstream shapes are supported:
  - GeoJSON features (`format=geojson`), point in `geometry.coordinates` as
    [lon, lat] and extent in `bbox` as [minLon, minLat, maxLon, maxLat].
  - Flat address records (`format=json`), `lat`/`lon` as decimal strings and
    extent in `boundingbox` as [minLat, maxLat, minLon, maxLon].

Both return (lat, lng) ordered values on the entity.
"""
from __future__ import annotations

import math
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from ..core.errors import MalformedResponse, MissingCoordinates
from .base import Bounds, LatLng, Location, Polygon
from .schemas import AddressRecord, Feature, FeatureCollection, GeoJsonGeometry

DEFAULT_ZOOM = 10.0

# Suggested map zoom per place classification. A heuristic, not provider data.
ZOOM_BY_CLASSIFICATION: Dict[str, float] = {
    "country": 3,
    "state": 5,
    "province": 5,
    "region": 6,
    "county": 8,
    "district": 9,
    "city": 10,
    "town": 10,
    "postcode": 12,
    "village": 12,
    "suburb": 13,
    "neighborhood": 14,
    "neighbourhood": 14,
    "place": 15,
    "square": 15,
    "circle": 15,
    "poi": 15,
    "street": 16,
    "road": 16,
    "avenue": 16,
    "boulevard": 16,
    "lane": 16,
    "landmark": 16,
    "intersection": 17,
    "building": 18,
    "house": 18,
    "apartment": 18,
    "unit": 18,
    "floor": 18,
}

# Used only for flat records that carry geometry but no classification.
ZOOM_BY_GEOMETRY_TYPE: Dict[str, float] = {
    "Point": 16,
    "LineString": 13,
    "Polygon": 12,
    "MultiPoint": 15,
    "MultiLineString": 11,
    "MultiPolygon": 10,
}
DEFAULT_GEOMETRY_ZOOM = 13.0


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _address_fields(address: Mapping[str, Any]) -> Dict[str, Optional[str]]:
    return {
        "road": _text(address.get("road")),
        "city": _text(address.get("city") or address.get("town") or address.get("village")),
        "suburb": _text(address.get("suburb")),
        "neighbourhood": _text(address.get("neighbourhood")),
        "postcode": _text(address.get("postcode")),
        "state": _text(address.get("state")),
        "country": _text(address.get("country")),
        "country_code": _text(address.get("country_code")),
        "house_number": _text(address.get("house_number")),
        "borough": _text(address.get("borough")),
        "municipality": _text(address.get("municipality")),
    }


def zoom_for_classification(classification: Optional[str]) -> float:
    if not classification:
        return DEFAULT_ZOOM
    return float(ZOOM_BY_CLASSIFICATION.get(classification.strip().lower(), DEFAULT_ZOOM))


def _zoom_from_candidates(*candidates: Optional[str]) -> float:
    """First candidate found in the table wins, in the order given."""
    for c in candidates:
        if c and c.strip().lower() in ZOOM_BY_CLASSIFICATION:
            return zoom_for_classification(c)
    return DEFAULT_ZOOM


def zoom_for_geometry_type(geometry_type: Optional[str]) -> float:
    return float(ZOOM_BY_GEOMETRY_TYPE.get(geometry_type or "", DEFAULT_GEOMETRY_ZOOM))


def _lat_lng(pair: Any) -> LatLng:
    # GeoJSON positions are [lon, lat, (alt)]
    if not isinstance(pair, (list, tuple)) or len(pair) < 2:
        raise MalformedResponse(f"Bad coordinate pair: {pair!r}")
    try:
        return (float(pair[1]), float(pair[0]))
    except (TypeError, ValueError) as exc:
        raise MalformedResponse(f"Bad coordinate pair: {pair!r}") from exc


def _ring(ring: Any) -> Polygon:
    if not isinstance(ring, list):
        raise MalformedResponse(f"Bad polygon ring: {ring!r}")
    return tuple(_lat_lng(p) for p in ring)


def geometry_from_geojson(
    geojson: Union[GeoJsonGeometry, Mapping[str, Any], None],
) -> Optional[Tuple[Polygon, ...]]:
    """
    Polygon -> one polygon from its outer ring.
    MultiPolygon -> one polygon per member's outer ring.
    Any other type -> None.
    """
    if geojson is None:
        return None
    if isinstance(geojson, GeoJsonGeometry):
        gtype, coords = geojson.type, geojson.coordinates
    else:
        gtype, coords = geojson.get("type"), geojson.get("coordinates")

    try:
        if gtype == "Polygon":
            return (_ring(coords[0]),)
        if gtype == "MultiPolygon":
            return tuple(_ring(poly[0]) for poly in coords)
    except (TypeError, IndexError, KeyError) as exc:
        raise MalformedResponse(f"Bad {gtype} coordinates") from exc
    return None


def bounds_from_bbox(bbox: Sequence[float]) -> Bounds:
    """GeoJSON bbox: [minLon, minLat, maxLon, maxLat]."""
    if len(bbox) != 4:
        raise MalformedResponse(f"Expected 4 bbox values, got {len(bbox)}")
    min_lon, min_lat, max_lon, max_lat = (float(v) for v in bbox)
    return Bounds(southwest=(min_lat, min_lon), northeast=(max_lat, max_lon))


def bounds_from_boundingbox(boundingbox: Sequence[Union[str, float]]) -> Bounds:
    """Nominatim boundingbox: [minLat, maxLat, minLon, maxLon] as decimal strings."""
    if len(boundingbox) != 4:
        raise MalformedResponse(f"Expected 4 boundingbox values, got {len(boundingbox)}")
    try:
        min_lat, max_lat, min_lon, max_lon = (float(v) for v in boundingbox)
    except ValueError as exc:
        raise MalformedResponse("Unparsable boundingbox") from exc
    return Bounds(southwest=(min_lat, min_lon), northeast=(max_lat, max_lon))


def _center(bounds: Optional[Bounds], geometry: Optional[Tuple[Polygon, ...]]) -> LatLng:
    if bounds is not None:
        return (
            (bounds.southwest[0] + bounds.northeast[0]) / 2.0,
            (bounds.southwest[1] + bounds.northeast[1]) / 2.0,
        )
    if geometry and geometry[0]:
        ring = geometry[0]
        return (
            sum(p[0] for p in ring) / len(ring),
            sum(p[1] for p in ring) / len(ring),
        )
    raise MissingCoordinates("Polygon feature without usable coordinates")


def _first_position(coords: Any) -> LatLng:
    # Depth varies by type: LineString and MultiPoint nest once, MultiLineString twice.
    while isinstance(coords, list) and coords and isinstance(coords[0], list):
        coords = coords[0]
    return _lat_lng(coords)


def _build(**kwargs: Any) -> Location:
    try:
        return Location(**kwargs)
    except ValueError as exc:
        raise MalformedResponse(str(exc)) from exc


def from_feature(feature: Union[Mapping[str, Any], Feature]) -> Location:
    if not isinstance(feature, Feature):
        try:
            feature = Feature.model_validate(feature)
        except ValidationError as exc:
            raise MalformedResponse(f"Invalid GeoJSON feature: {exc.error_count()} error(s)") from exc

    geom = feature.geometry
    if geom is None or geom.coordinates is None:
        raise MissingCoordinates()

    bounds = bounds_from_bbox(feature.bbox) if feature.bbox else None
    geometry = geometry_from_geojson(geom)
    if geometry is not None:
        lat, lng = _center(bounds, geometry)
    elif geom.type == "Point":
        lat, lng = _lat_lng(geom.coordinates)
    elif bounds is not None:
        lat, lng = _center(bounds, None)
    else:
        lat, lng = _first_position(geom.coordinates)

    props = feature.properties
    return _build(
        latitude=lat,
        longitude=lng,
        display_name=_text(props.display_name),
        name=_text(props.name),
        bounds=bounds,
        geometry=geometry,
        zoom=_zoom_from_candidates(props.addresstype, props.category, props.type),
        **_address_fields(props.address),
    )


def from_address_record(record: Union[Mapping[str, Any], AddressRecord]) -> Location:
    if not isinstance(record, AddressRecord):
        try:
            record = AddressRecord.model_validate(record)
        except ValidationError as exc:
            raise MalformedResponse(f"Invalid address record: {exc.error_count()} error(s)") from exc

    if record.lat is None or record.lon is None:
        raise MissingCoordinates()
    try:
        lat = float(record.lat)
        lng = float(record.lon)
    except ValueError as exc:
        raise MissingCoordinates(f"Unparsable coordinates: {record.lat!r}, {record.lon!r}") from exc
    if not (math.isfinite(lat) and math.isfinite(lng)):
        raise MissingCoordinates(f"Unparsable coordinates: {record.lat!r}, {record.lon!r}")

    zoom: Optional[float] = None
    geometry = None
    if record.geojson is not None:
        geometry = geometry_from_geojson(record.geojson)
        classification = (record.addresstype, record.category or record.osm_class, record.type)
        if any(classification):
            zoom = _zoom_from_candidates(*classification)
        else:
            zoom = zoom_for_geometry_type(record.geojson.type)

    return _build(
        latitude=lat,
        longitude=lng,
        display_name=_text(record.display_name),
        name=_text(record.name),
        bounds=bounds_from_boundingbox(record.boundingbox) if record.boundingbox else None,
        geometry=geometry,
        zoom=zoom,
        **_address_fields(record.address),
    )


def from_feature_collection(data: Any) -> List[Location]:
    """Every feature of a `{"features": [...]}` body; a body without features yields []."""
    if not isinstance(data, dict) or "features" not in data:
        return []
    try:
        collection = FeatureCollection.model_validate(data)
    except ValidationError as exc:
        raise MalformedResponse("Invalid feature collection") from exc
    return [from_feature(f) for f in collection.features]
