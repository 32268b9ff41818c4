# app/routers/vehicles.py
"""Vehicle catalog: read-only listing for the storefront."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from app.database import get_db
from app.schemas.vehicle import VehicleOut
from app.services.catalog_service import list_vehicles, to_vehicle_out
from app.utils.logger import get_logger

router = APIRouter()
logger = get_logger(__name__)


@router.get("/vehicles", response_model=list[VehicleOut], summary="List the vehicle catalog")
def get_vehicles(db: Session = Depends(get_db)):
    """All vehicles ordered by id, with daily rent and purchase prices."""
    try:
        return [to_vehicle_out(v) for v in list_vehicles(db)]
    except SQLAlchemyError as e:
        logger.error(f"Vehicle listing failed: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch vehicles."})
