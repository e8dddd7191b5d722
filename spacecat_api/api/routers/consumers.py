"""
Consumer API endpoints (S2S admins only).

Routes:
- GET /consumers - List consumers
- GET /consumers/by-client-id/{client_id} - Get consumer by IMS client id
- GET /consumers/{consumer_id} - Get single consumer
- POST /consumers/register - Register from a Technical Account token
- PATCH /consumers/{consumer_id} - Update name, capabilities or status
- POST /consumers/{consumer_id}/revoke - Revoke consumer

Every error response also carries the message in the x-error header.

Dependencies: spacecat_api.application.services
System role: S2S consumer registry HTTP API
"""

from typing import Any

from fastapi import APIRouter, Body, Depends, status

from spacecat_api.api.deps.dependencies import get_consumer_service
from spacecat_api.application.services.consumer_service import ConsumerService

from .router_utils import handle_api_errors

router = APIRouter(prefix="/consumers", tags=["consumers"])


@router.get("")
@handle_api_errors("Failed to retrieve consumers", error_header=True)
async def list_consumers(
    consumer_service: ConsumerService = Depends(get_consumer_service),
) -> list[dict[str, Any]]:
    return await consumer_service.list_consumers()


@router.get("/by-client-id/{client_id}")
@handle_api_errors("Failed to retrieve consumer", error_header=True)
async def get_consumer_by_client_id(
    client_id: str,
    consumer_service: ConsumerService = Depends(get_consumer_service),
) -> dict[str, Any]:
    return await consumer_service.get_by_client_id(client_id)


@router.get("/{consumer_id}")
@handle_api_errors("Failed to retrieve consumer", error_header=True)
async def get_consumer(
    consumer_id: str,
    consumer_service: ConsumerService = Depends(get_consumer_service),
) -> dict[str, Any]:
    return await consumer_service.get_by_consumer_id(consumer_id)


@router.post("/register", status_code=status.HTTP_201_CREATED)
@handle_api_errors("Failed to register consumer", error_header=True)
async def register_consumer(
    payload: Any = Body(default=None),
    consumer_service: ConsumerService = Depends(get_consumer_service),
) -> dict[str, Any]:
    """
    Register a consumer from a Technical Account access token.

    Args:
        payload: {accessToken, consumerName, capabilities}
        consumer_service: Injected ConsumerService

    Returns:
        dict: Registered consumer

    Raises:
        HTTPException(400): Bad body, rejected token or duplicate client id
        HTTPException(403): Caller is not an S2S admin
    """
    return await consumer_service.register(payload)


@router.patch("/{consumer_id}")
@handle_api_errors("Failed to update consumer", error_header=True)
async def update_consumer(
    consumer_id: str,
    payload: Any = Body(default=None),
    consumer_service: ConsumerService = Depends(get_consumer_service),
) -> dict[str, Any]:
    return await consumer_service.update(consumer_id, payload)


@router.post("/{consumer_id}/revoke")
@handle_api_errors("Failed to revoke consumer", error_header=True)
async def revoke_consumer(
    consumer_id: str,
    consumer_service: ConsumerService = Depends(get_consumer_service),
) -> dict[str, Any]:
    return await consumer_service.revoke(consumer_id)
