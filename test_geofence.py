import logging
import math

import pytest

from presensi.core.geofence import (
    EARTH_RADIUS_METERS, GeoPoint, GeofenceRule, GeofenceValidator, GeofenceInputError,
    ValidationResult, check_ranges, compute_distance, validate,
)

KANTOR = GeoPoint(-8.4000271, 115.5430133)


def point_north_of(center: GeoPoint, meters: float) -> GeoPoint:
    """Titik di meridian yang sama, tepat `meters` ke utara (jarak Haversine = R * dphi)."""
    dlat = math.degrees(meters / EARTH_RADIUS_METERS)
    return GeoPoint(center.latitude + dlat, center.longitude)


def test_identity_distance_is_zero():
    for p in [KANTOR, GeoPoint(0, 0), GeoPoint(90, 180), GeoPoint(-45.5, -120.25)]:
        assert compute_distance(p, p) == 0


def test_symmetry():
    pairs = [
        (KANTOR, GeoPoint(-6.2615, 106.8106)),
        (GeoPoint(51.5074, -0.1278), GeoPoint(40.7128, -74.0060)),
        (GeoPoint(0, 0), GeoPoint(-33.8688, 151.2093)),
    ]
    for a, b in pairs:
        assert compute_distance(a, b) == compute_distance(b, a)


def test_known_value_same_point_is_valid():
    rule = GeofenceRule(center=KANTOR, radius_meters=100)
    result = validate(KANTOR, rule)

    assert result.distance_meters == 0
    assert result.is_valid is True
    assert result.allowed_radius_meters == 100


def test_known_value_200m_north_is_rejected():
    rule = GeofenceRule(center=KANTOR, radius_meters=100)
    result = validate(GeoPoint(KANTOR.latitude + 0.0018, KANTOR.longitude), rule)

    assert abs(result.distance_meters - 200) <= 5
    assert result.is_valid is False


def test_boundary_is_inclusive():
    user = point_north_of(KANTOR, 150)
    d = compute_distance(user, KANTOR)
    assert d == 150

    result = validate(user, GeofenceRule(center=KANTOR, radius_meters=d))
    assert result.is_valid is True

    result = validate(user, GeofenceRule(center=KANTOR, radius_meters=d - 1))
    assert result.is_valid is False


def test_monotonic_verdict():
    rule = GeofenceRule(center=KANTOR, radius_meters=100)
    verdicts = [validate(point_north_of(KANTOR, m), rule).is_valid for m in range(0, 301, 10)]

    first_invalid = verdicts.index(False)
    assert all(verdicts[:first_invalid])
    assert not any(verdicts[first_invalid:])


def test_antipodal_points_are_finite():
    d = compute_distance(GeoPoint(0, 0), GeoPoint(0, 180))

    assert not math.isnan(d)
    assert abs(d - math.pi * EARTH_RADIUS_METERS) <= 1
    assert abs(d - 20_015_086) <= 1


def test_near_antipodal_does_not_raise():
    d = compute_distance(GeoPoint(45.0, 10.0), GeoPoint(-45.0, -170.0))
    assert abs(d - math.pi * EARTH_RADIUS_METERS) <= 1


def test_clamps_haversine_overshoot_near_antipode():
    # Pasangan ini memberi h = 1.0000000000000002 sebelum di-clamp
    a = GeoPoint(89.59799164833686, 133.22056586673614)
    b = GeoPoint(-89.59799164833686, -46.77943413326386)

    d = compute_distance(a, b)

    assert math.isfinite(d)
    assert abs(d - math.pi * EARTH_RADIUS_METERS) <= 1


def test_rounds_half_up_to_whole_meter():
    assert compute_distance(point_north_of(KANTOR, 99.6), KANTOR) == 100
    assert compute_distance(point_north_of(KANTOR, 99.4), KANTOR) == 99
    assert compute_distance(point_north_of(KANTOR, 0.5000001), KANTOR) == 1


def test_out_of_range_input_is_accepted_numerically():
    d = compute_distance(GeoPoint(120, 0), GeoPoint(0, 400))
    assert isinstance(d, int)
    assert d >= 0


def test_validate_logs_through_injected_logger(caplog):
    log = logging.getLogger("test.geofence.audit")
    validator = GeofenceValidator(log)

    with caplog.at_level(logging.INFO, logger="test.geofence.audit"):
        result = validator.validate(point_north_of(KANTOR, 250), GeofenceRule(KANTOR, 100))

    assert result == ValidationResult(is_valid=False, distance_meters=250, allowed_radius_meters=100)
    assert len(caplog.records) == 1
    assert caplog.records[0].name == "test.geofence.audit"
    assert "distance=250m" in caplog.text
    assert "isValid=False" in caplog.text


def test_result_to_dict_uses_api_keys():
    result = ValidationResult(is_valid=True, distance_meters=45, allowed_radius_meters=100)
    assert result.to_dict() == {"isValid": True, "distance": 45, "allowedRadius": 100}


def test_check_ranges_lists_every_bad_field():
    check_ranges(KANTOR, 100)

    with pytest.raises(GeofenceInputError) as exc:
        check_ranges(GeoPoint(91, -181), -5)
    assert exc.value.fields == ["latitude", "longitude", "radius_meters"]

    with pytest.raises(GeofenceInputError) as exc:
        check_ranges(GeoPoint(-90.5, 0))
    assert exc.value.fields == ["latitude"]
