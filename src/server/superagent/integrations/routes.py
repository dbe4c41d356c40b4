import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse

from superagent.auth.utils import resolve_user_id, set_identity_cookie
from superagent.config import DEFAULT_INTEGRATION, INTEGRATIONS_CONFIG
from superagent.dependencies import get_connection_gateway
from superagent.integrations.models import ConnectionRequest
from superagent.integrations.utils import ConnectionFailedError, ConnectionGateway, UnknownIntegrationError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Integrations Management"]
)

async def _check_status_response(gateway: ConnectionGateway, connection_id: str) -> JSONResponse:
    try:
        connection_status = await gateway.check_status(connection_id)
    except ConnectionFailedError as e:
        return JSONResponse(content={
            "success": False,
            "error": "Failed to get connection status",
            "details": str(e),
        })
    return JSONResponse(content={
        "success": True,
        "status": connection_status.status,
        "isActive": connection_status.is_active,
    })

async def _handle_connection_request(
    request: Request,
    body: ConnectionRequest,
    platform: str,
    gateway: ConnectionGateway,
) -> JSONResponse:
    user_id, is_new_user = resolve_user_id(request, body.user_id)
    logger.info(f"Connection request: action={body.action} platform={platform} connectionId={body.connectionId} user={user_id}")

    try:
        if body.action == "initiate":
            initiation = await gateway.initiate(user_id, platform)

            if initiation.already_connected:
                response = JSONResponse(content={
                    "success": True,
                    "alreadyConnected": True,
                    "message": "User already has connected accounts. Signed in.",
                })
                set_identity_cookie(response, user_id)
                return response

            response_body = {
                "success": True,
                "message": "Connection initiated successfully",
                "redirectUrl": initiation.redirect_url,
                "connectionId": initiation.connection_id,
                "data": {
                    "action": body.action,
                    "platform": platform,
                    "status": "initiated",
                },
            }
            if is_new_user:
                response_body["userId"] = user_id
            response = JSONResponse(content=response_body)
            set_identity_cookie(response, user_id)
            return response

        if body.action == "check_status":
            if not body.connectionId:
                return JSONResponse(
                    content={"success": False, "error": "Connection ID is required for status check"},
                    status_code=400,
                )
            return await _check_status_response(gateway, body.connectionId)

        return JSONResponse(
            content={"success": False, "error": 'Invalid action. Use "initiate" or "check_status"'},
            status_code=400,
        )
    except UnknownIntegrationError as e:
        return JSONResponse(content={"success": False, "error": str(e)}, status_code=400)
    except Exception as e:
        logger.error(f"Connection error for user {user_id}: {e}", exc_info=True)
        return JSONResponse(
            content={
                "success": False,
                "error": "Failed to process connection request",
                "details": str(e),
            },
            status_code=500,
        )

@router.post("/connecting-email", summary="Initiate or check a platform connection")
async def connecting_email(
    request: Request,
    body: ConnectionRequest,
    gateway: ConnectionGateway = Depends(get_connection_gateway),
):
    platform = body.platform if body.platform in INTEGRATIONS_CONFIG else DEFAULT_INTEGRATION
    return await _handle_connection_request(request, body, platform, gateway)

@router.post("/connection/{platform}", summary="Initiate or check a connection for one integration")
async def connection_for_platform(
    platform: str,
    request: Request,
    body: ConnectionRequest,
    gateway: ConnectionGateway = Depends(get_connection_gateway),
):
    return await _handle_connection_request(request, body, platform, gateway)

@router.get("/connecting-email", summary="Connection status or OAuth callback")
async def connecting_email_callback(
    connectionId: Optional[str] = None,
    code: Optional[str] = None,
    state: Optional[str] = None,
    gateway: ConnectionGateway = Depends(get_connection_gateway),
):
    if connectionId:
        return await _check_status_response(gateway, connectionId)

    logger.info(f"OAuth callback received: code={bool(code)} state={state}")
    if code and state:
        return RedirectResponse(url="/?auth=success", status_code=307)

    return JSONResponse(content={
        "success": True,
        "message": "OAuth callback received",
        "data": {
            "code": bool(code),
            "state": state,
            "status": "success" if code else "pending",
        },
    })
