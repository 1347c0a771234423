"""API endpoint listing the LoRAs installed on the ComfyUI server."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from src.api.comfyui.models import LoraListResponse
from src.generation.comfyui import ComfyUIClient
from src.generation.exceptions import GenerationClientError
from src.utils.config import AppSettings, get_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/comfyui-loras", tags=["Generation"])


@router.get(
    "",
    response_model=LoraListResponse,
    summary="List ComfyUI LoRAs",
)
def list_comfyui_loras(settings: AppSettings = Depends(get_settings)) -> LoraListResponse:
    """List the LoRA files the image provider can chain into a workflow."""
    client = ComfyUIClient(settings.comfyui_api_url)
    try:
        loras = client.list_loras()
    except GenerationClientError as e:
        logger.error(f"Listing ComfyUI LoRAs failed: {e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.message) from e

    logger.info(f"Listed ComfyUI LoRAs: count={len(loras)}")
    return LoraListResponse(loras=loras)
