"""
rides-api: the shared-rides board.

Matching is a plain insert of a pending (request, offer) pair; there is no
route scoring.
"""

from __future__ import annotations

import logging
import time

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.auth import AuthenticatedUser, get_current_user
from backend.db import DbClient, RideMatch, RideOffer, RideRequest
from backend.dependencies import get_db_client, get_geocoder
from backend.geocoding import Geocoder, GeocodingError
from backend.routes.common import blank_to_none, profile_summary
from backend.schemas import (
    CreateMatchRequest,
    CreateRideOffer,
    CreateRideRequest,
    GeocodeResponse,
    ReverseGeocodeResponse,
    SuccessResponse,
)
from shared.constants import DEFAULT_DRIVER_NAME, DEFAULT_STUDENT_NAME

logger = logging.getLogger(__name__)

router = APIRouter()


def _route_fields(payload: CreateRideRequest | CreateRideOffer) -> dict:
    departure = payload.departure_time.timestamp()
    expires_at = payload.expires_at.timestamp() if payload.expires_at else departure
    return {
        "origin_address": payload.origin_address,
        "origin_latitude": payload.origin_latitude,
        "origin_longitude": payload.origin_longitude,
        "destination_address": payload.destination_address,
        "destination_latitude": payload.destination_latitude,
        "destination_longitude": payload.destination_longitude,
        "departure_time": departure,
        "description": blank_to_none(payload.description),
        "expires_at": expires_at,
    }


@router.get("/requests")
def list_requests(
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    requests = db.list_active_ride_requests(time.time())
    profiles = db.get_profiles(r.student_id for r in requests)
    return [
        {
            **request.as_dict(),
            "student": profile_summary(profiles, request.student_id, DEFAULT_STUDENT_NAME),
        }
        for request in requests
    ]


@router.get("/offers")
def list_offers(
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    offers = db.list_active_ride_offers(time.time())
    profiles = db.get_profiles(o.driver_id for o in offers)
    return [
        {
            **offer.as_dict(),
            "driver": profile_summary(profiles, offer.driver_id, DEFAULT_DRIVER_NAME),
        }
        for offer in offers
    ]


@router.post("/requests", status_code=201)
def create_request(
    payload: CreateRideRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    request = db.create_ride_request(
        RideRequest(
            student_id=user.id,
            max_passengers=payload.max_passengers,
            **_route_fields(payload),
        )
    )
    return request.as_dict()


@router.post("/offers", status_code=201)
def create_offer(
    payload: CreateRideOffer,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    offer = db.create_ride_offer(
        RideOffer(
            driver_id=user.id,
            available_seats=payload.available_seats,
            vehicle_description=blank_to_none(payload.vehicle_description),
            **_route_fields(payload),
        )
    )
    return offer.as_dict()


@router.post("/matches", response_model=SuccessResponse)
def create_match(
    payload: CreateMatchRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    db: DbClient = Depends(get_db_client),
):
    if not db.get_ride_request(payload.request_id):
        raise HTTPException(status_code=404, detail="Ride request not found")
    if not db.get_ride_offer(payload.offer_id):
        raise HTTPException(status_code=404, detail="Ride offer not found")
    match = db.create_ride_match(
        RideMatch(request_id=payload.request_id, offer_id=payload.offer_id)
    )
    logger.info("User %s created ride match %s", user.id, match.id)
    return SuccessResponse()


@router.get("/geocode", response_model=GeocodeResponse)
def geocode(
    address: str = Query(..., min_length=1),
    user: AuthenticatedUser = Depends(get_current_user),
    geocoder: Geocoder = Depends(get_geocoder),
):
    try:
        location = geocoder.geocode(address)
    except GeocodingError:
        raise HTTPException(status_code=502, detail="Geocoding service unavailable")
    if location is None:
        raise HTTPException(status_code=404, detail="Address not found")
    lat, lon = location
    return GeocodeResponse(lat=lat, lon=lon)


@router.get("/reverse-geocode", response_model=ReverseGeocodeResponse)
def reverse_geocode(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    user: AuthenticatedUser = Depends(get_current_user),
    geocoder: Geocoder = Depends(get_geocoder),
):
    try:
        display_name = geocoder.reverse(lat, lon)
    except GeocodingError:
        raise HTTPException(status_code=502, detail="Geocoding service unavailable")
    if not display_name:
        raise HTTPException(status_code=404, detail="Location not found")
    return ReverseGeocodeResponse(display_name=display_name)
