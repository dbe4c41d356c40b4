import logging
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from superagent.dependencies import get_presentation_converter, get_slide_service
from superagent.slides.export import (
    PPTX_MEDIA_TYPE, ConversionFailedError, ConverterNotConfiguredError,
    PresentationConverter, presentation_filename,
)
from superagent.slides.models import (
    ConvertToPptRequest, GenerateSlidesFromContentRequest, GenerateSlidesFromTopicRequest,
)
from superagent.slides.utils import SlideGenerationError, SlideGenerationService

router = APIRouter(
    prefix="/api",
    tags=["Slides"]
)
logger = logging.getLogger(__name__)

@router.post("/generate-slides", summary="Generate slides from structured content")
async def generate_slides_from_content(
    request_body: GenerateSlidesFromContentRequest,
    slide_service: SlideGenerationService = Depends(get_slide_service),
):
    if not request_body.content or not request_body.content.strip():
        return JSONResponse(content={"error": "Content is required to generate slides."}, status_code=400)

    try:
        slides = await slide_service.generate_from_content(
            request_body.content, request_body.style, request_body.slideCount
        )
    except SlideGenerationError as e:
        logger.error(f"Error generating slides from content: {e}", exc_info=True)
        return JSONResponse(content={"error": "Failed to generate slides.", "details": str(e)}, status_code=500)

    return JSONResponse(content={
        "slides": [slide.model_dump(mode="json") for slide in slides],
        "hasSlides": True,
    })

@router.post("/generate-slides/topic", summary="Generate slides about a topic")
async def generate_slides_from_topic(
    request_body: GenerateSlidesFromTopicRequest,
    slide_service: SlideGenerationService = Depends(get_slide_service),
):
    if not request_body.userId:
        return JSONResponse(content={"error": "Authentication required. Please sign in."}, status_code=401)
    if not request_body.topic or not request_body.topic.strip():
        return JSONResponse(content={"error": "A topic is required to generate slides."}, status_code=400)

    try:
        slides = await slide_service.generate_from_topic(
            request_body.topic.strip(), request_body.slideCount, request_body.style
        )
    except SlideGenerationError as e:
        logger.error(f"Error generating slides for user {request_body.userId}: {e}", exc_info=True)
        return JSONResponse(content={"error": "Failed to generate slides.", "details": str(e)}, status_code=500)

    return JSONResponse(content={
        "slides": [slide.model_dump(mode="json") for slide in slides],
        "userId": request_body.userId,
    })

@router.post("/convert-to-ppt", summary="Export slides as a PowerPoint file")
async def convert_to_ppt(
    request_body: ConvertToPptRequest,
    converter: PresentationConverter = Depends(get_presentation_converter),
):
    if not request_body.slides:
        return JSONResponse(content={"error": "No slides to convert."}, status_code=400)

    try:
        pptx_bytes = await converter.convert(request_body.slides, request_body.title, request_body.style)
    except ConverterNotConfiguredError as e:
        logger.error(f"Presentation export unavailable: {e}")
        return JSONResponse(content={"error": "Presentation export is not available."}, status_code=503)
    except ConversionFailedError as e:
        return JSONResponse(content={"error": "Failed to convert to PowerPoint.", "details": str(e)}, status_code=502)

    filename = presentation_filename(request_body.title)
    return Response(
        content=pptx_bytes,
        media_type=PPTX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
