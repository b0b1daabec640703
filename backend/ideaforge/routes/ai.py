from fastapi import APIRouter, Depends

from .. import schemas
from ..dependencies import get_inference
from ..services.inference import InferenceGateway

router = APIRouter(prefix="/api/ai", tags=["ai"])


@router.post("/validate-idea")
def validate_idea(
    payload: schemas.ValidateIdeaRequest,
    inference: InferenceGateway = Depends(get_inference),
):
    result = inference.validate_idea(payload.title, payload.description, payload.category, payload.content)
    return schemas.ok(result)


@router.post("/analyze-content")
def analyze_content(
    payload: schemas.AnalyzeContentRequest,
    inference: InferenceGateway = Depends(get_inference),
):
    return schemas.ok(inference.analyze_content(payload.content, payload.content_type))


@router.post("/generate-metadata")
def generate_metadata(
    payload: schemas.GenerateMetadataRequest,
    inference: InferenceGateway = Depends(get_inference),
):
    metadata = inference.generate_metadata(
        payload.title, payload.description, payload.category, payload.ai_score
    )
    return schemas.ok(metadata)


@router.get("/health")
def health():
    return schemas.ok(schemas.AIHealth(status="healthy", timestamp=schemas.now_ms()))
