from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.core.logger import get_logger
from app.core.services import Services, get_services
from app.model.response import ChatRequest, ChatResponse, ErrorResponse, MachineListRequest
from app.rag import MachineListResult

API_VERSION = "1.0.0"

logger = get_logger(__name__)

api_router = APIRouter()

INTERNAL_ERROR = {500: {"model": ErrorResponse}}


def _internal_error() -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": "Internal error"})


@api_router.post("/chat", response_model=ChatResponse, responses=INTERNAL_ERROR)
async def chat(request: ChatRequest, services: Services = Depends(get_services)):
    try:
        reply = await services.chat.multi_step_chat(request.message)
    except Exception:
        logger.exception("chat request failed")
        return _internal_error()
    return ChatResponse(reply=reply)


@api_router.post("/machines", response_model=MachineListResult, responses=INTERNAL_ERROR)
async def machines(request: MachineListRequest, services: Services = Depends(get_services)):
    try:
        return await services.machines.get_machine_list(
            request.vehicle_type,
            manufacturer=request.manufacturer,
            model_keyword=request.model_keyword,
        )
    except Exception:
        logger.exception("machine list request failed")
        return _internal_error()


@api_router.get("/health")
async def health_check():
    """Health check endpoint.

    Returns:
        dict: Health status information.
    """
    return {"status": "healthy", "version": API_VERSION}
