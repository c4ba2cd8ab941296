"""Route ordering and generation endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.routing import OrderRequest, OrderResponse, RouteGenerationRequest, RouteGenerationResponse
from ...services.routing.service import generate_routes, order_points

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/order", response_model=OrderResponse, status_code=status.HTTP_200_OK)
def order(payload: OrderRequest) -> OrderResponse:
    """Order points by greedy nearest-neighbor, starting from the first point."""
    try:
        return order_points(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error ordering points: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to order points: {str(exc)}",
        ) from exc


@router.post("/generate", response_model=RouteGenerationResponse, status_code=status.HTTP_200_OK)
def generate(payload: RouteGenerationRequest) -> RouteGenerationResponse:
    try:
        return generate_routes(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error generating routes: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to generate routes: {str(exc)}",
        ) from exc
