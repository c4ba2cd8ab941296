"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/osrm", status_code=status.HTTP_200_OK)
def health_osrm() -> dict:
    """Check OSRM service health."""
    from ...services.routing.osrm_client import check_health

    return {"service": "osrm", "healthy": check_health()}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database connection and buildings table status."""
    from ...db.supabase import get_supabase_client, supabase_configured

    supabase = get_supabase_client() if supabase_configured() else None
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set ARCHROUTE_SUPABASE_URL and ARCHROUTE_SUPABASE_KEY environment variables.",
        }

    try:
        response = supabase.table("buildings").select("id", count="exact").limit(1).execute()
        return {
            "configured": True,
            "connected": True,
            "buildings_count": response.count,
            "message": "Database connected.",
        }
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
