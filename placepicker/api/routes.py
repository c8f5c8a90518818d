from fastapi import APIRouter, Depends, HTTPException, Query, Request
from .schemas import HistoryResponse, InitialLocationResponse, LocationModel, SearchResponse
from ..core.auth import require_api_key
from ..core.coordinator import SearchCoordinator
from ..core.errors import GeocodingError, PermissionDenied, PermissionDeniedForever, ServicesDisabled
from ..core.resolver import LocationResolver

router = APIRouter()


def get_coordinator(request: Request) -> SearchCoordinator:
    return request.app.state.coordinator


def get_resolver(request: Request) -> LocationResolver:
    return request.app.state.resolver


def _history(coordinator: SearchCoordinator) -> HistoryResponse:
    return HistoryResponse(items=[LocationModel.from_location(loc) for loc in coordinator.history])

@router.get("/locations/search", response_model=SearchResponse, dependencies=[Depends(require_api_key)])
async def search_locations(q: str = "", coordinator: SearchCoordinator = Depends(get_coordinator)):
    results = await coordinator.search(q)
    return SearchResponse(query=q, results=[LocationModel.from_location(loc) for loc in results])

@router.get("/locations/reverse", response_model=LocationModel, dependencies=[Depends(require_api_key)])
async def reverse_location(
    lat: float = Query(ge=-90, le=90),
    lon: float = Query(ge=-180, le=180),
    coordinator: SearchCoordinator = Depends(get_coordinator),
):
    location = await coordinator.pick_at(lat, lon)
    if location is None:
        raise HTTPException(status_code=404, detail="no location at coordinate")
    return LocationModel.from_location(location)

@router.get("/locations/initial", response_model=InitialLocationResponse, dependencies=[Depends(require_api_key)])
async def initial_location(resolver: LocationResolver = Depends(get_resolver)):
    try:
        ctx = await resolver.resolve()
    except GeocodingError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except Exception as e:
        # e.g. the device position lookup failing with no region to fall back on.
        raise HTTPException(status_code=503, detail=f"start location unavailable: {e}")
    if ctx.location is None:
        return InitialLocationResponse()
    return InitialLocationResponse(location=LocationModel.from_location(ctx.location), resolved_by=ctx.resolved_by)

@router.post("/locations/current", response_model=LocationModel, dependencies=[Depends(require_api_key)])
async def current_location(resolver: LocationResolver = Depends(get_resolver)):
    try:
        location = await resolver.get_current_location()
    except ServicesDisabled as e:
        raise HTTPException(status_code=503, detail={"kind": e.kind, "message": str(e)})
    except (PermissionDenied, PermissionDeniedForever) as e:
        raise HTTPException(status_code=403, detail={"kind": e.kind, "message": str(e)})
    return LocationModel.from_location(location)

@router.get("/history", response_model=HistoryResponse, dependencies=[Depends(require_api_key)])
async def read_history(coordinator: SearchCoordinator = Depends(get_coordinator)):
    return _history(coordinator)

@router.post("/history", response_model=HistoryResponse, dependencies=[Depends(require_api_key)])
async def select_location(body: LocationModel, coordinator: SearchCoordinator = Depends(get_coordinator)):
    coordinator.select_result(body.to_location())
    return _history(coordinator)
