from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import logging

from presensi.database import get_db
from presensi.core.geofence import GeofenceValidator, GeofenceRule, GeoPoint, GeofenceInputError
from presensi.routers.auth import get_current_karyawan
from presensi.schemas.auth import CurrentKaryawan
from presensi.schemas.presensi import LocationRequest, LocationValidationResponse, OfficeLocationResponse
from presensi.services.office_location import load_office_rule, OfficeLocationNotConfigured

logger = logging.getLogger("location_validation")

router = APIRouter(
    prefix="/api",
    tags=["Validation"],
    responses={404: {"description": "Not found"}},
)


def get_geofence_validator() -> GeofenceValidator:
    return GeofenceValidator(logging.getLogger("geofence"))


def office_rule_or_error(db: Session) -> GeofenceRule:
    try:
        return load_office_rule(db)
    except OfficeLocationNotConfigured:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"code": "NO_OFFICE_LOCATION", "message": "Office location not configured"},
        )
    except GeofenceInputError as e:
        logger.error(f"Data lokasi kantor tidak valid: {e.fields}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"code": "OFFICE_LOCATION_INVALID", "message": "Office location data is invalid", "fields": e.fields},
        )


@router.post("/validation/location", response_model=LocationValidationResponse)
async def validate_location(
    request: LocationRequest,
    current: CurrentKaryawan = Depends(get_current_karyawan),
    validator: GeofenceValidator = Depends(get_geofence_validator),
    db: Session = Depends(get_db)
):
    logger.info(f"[Location Validation] User: {current.nik}, Lat: {request.latitude}, Lng: {request.longitude}")

    rule = office_rule_or_error(db)
    result = validator.validate(GeoPoint(request.latitude, request.longitude), rule)

    return {
        "status": True,
        "data": {
            **result.to_dict(),
            "officeLocation": {
                "latitude": rule.center.latitude,
                "longitude": rule.center.longitude,
            },
        },
    }


@router.get("/settings/office-location", response_model=OfficeLocationResponse)
async def get_office_location(
    current: CurrentKaryawan = Depends(get_current_karyawan),
    db: Session = Depends(get_db)
):
    rule = office_rule_or_error(db)
    return {
        "status": True,
        "message": "Office location retrieved successfully",
        "data": {
            "latitude": rule.center.latitude,
            "longitude": rule.center.longitude,
            "radiusMeters": rule.radius_meters,
            "address": None,
        },
    }
