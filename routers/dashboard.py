# routers/dashboard.py

from fastapi import APIRouter, Depends, Query

from core.data_access import DataGateway
from dependencies.auth import get_approved_gateway
from services.dashboard_service import owner_stats, recent_activity, reports


router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
)


@router.get("/stats", summary="Owner dashboard counters")
def read_stats(gateway: DataGateway = Depends(get_approved_gateway)):
    return owner_stats(gateway)


@router.get("/recent-activity", summary="Latest payments, leases, maintenance and tenants")
def read_recent_activity(
    limit: int = Query(10, ge=1, le=50),
    gateway: DataGateway = Depends(get_approved_gateway),
):
    return recent_activity(gateway, limit=limit)


@router.get("/reports", summary="Occupancy, revenue and maintenance report")
def read_reports(gateway: DataGateway = Depends(get_approved_gateway)):
    return reports(gateway)
