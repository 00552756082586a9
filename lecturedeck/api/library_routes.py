"""
API Routes for the module library (modules, materials, uploads, analysis)
"""
from typing import Any, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from starlette.concurrency import run_in_threadpool
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings
from lecturedeck.api.session_routes import get_content_provider
from lecturedeck.exceptions import ApiError
from lecturedeck.models.content import Material
from lecturedeck.models.schemas import CreateModuleRequest, LibraryResponse, ModuleListResponse
from lecturedeck.services.library_service import LibraryService
from lecturedeck.utils.api_client import StudyApiClient
from lecturedeck.utils.logger import get_logger
from lecturedeck.utils.notifications import LoggingNotificationSink, MemoryNotificationSink

logger = get_logger(__name__)

router = APIRouter(prefix=f"/api/{settings.API_VERSION}/library", tags=["Library"])

limiter = Limiter(key_func=get_remote_address)


def get_library_service(provider: StudyApiClient = Depends(get_content_provider)) -> LibraryService:
    """One service per request so its notifications can be reported back"""
    return LibraryService(client=provider, notifier=MemoryNotificationSink(forward=LoggingNotificationSink()))


def _respond(service: LibraryService, outcome: Any) -> LibraryResponse:
    notifications = service.notifier.drain()
    message = notifications[-1].description if notifications else ""
    return LibraryResponse(
        success=bool(outcome),
        message=message,
        data=outcome if isinstance(outcome, dict) else None,
    )


def _find_material(provider: StudyApiClient, module_id: str, material_id: str) -> Material:
    try:
        module = provider.fetch_module(module_id)
    except ApiError as e:
        logger.error(f"Error loading module {module_id}: {e}")
        status_code = 404 if e.status_code == 404 else 502
        raise HTTPException(status_code=status_code, detail=f"Failed to load module: {e.message}")

    material: Optional[Material] = module.get_material(material_id)
    if material is None:
        raise HTTPException(status_code=404, detail="Material not found")
    return material


# =============================================================================
# MODULE ENDPOINTS
# =============================================================================

@router.get("/modules", response_model=ModuleListResponse)
def list_modules(provider: StudyApiClient = Depends(get_content_provider)):
    """List every module of the current user"""
    try:
        modules = provider.fetch_modules()
    except ApiError as e:
        logger.error(f"Error loading modules: {e}")
        raise HTTPException(status_code=502, detail=f"Failed to load modules: {e.message}")
    return ModuleListResponse(success=True, modules=modules)


@router.post("/modules", response_model=LibraryResponse)
def create_module(body: CreateModuleRequest, service: LibraryService = Depends(get_library_service)):
    """Create a new module"""
    return _respond(service, service.create_module(body.title, body.description))


@router.delete("/modules/{module_id}", response_model=LibraryResponse)
def delete_module(module_id: str, service: LibraryService = Depends(get_library_service)):
    """Delete a module"""
    return _respond(service, service.delete_module(module_id))


# =============================================================================
# MATERIAL ENDPOINTS
# =============================================================================

@router.post("/modules/{module_id}/materials", response_model=LibraryResponse)
@limiter.limit("20/minute")
async def upload_material(
    request: Request,
    module_id: str,
    file: UploadFile = File(...),
    service: LibraryService = Depends(get_library_service),
):
    """Upload a lecture document into a module"""
    content = await file.read()
    logger.info(f"Received upload {file.filename} ({len(content)} bytes) for module {module_id}")
    outcome = await run_in_threadpool(
        service.upload_material,
        module_id,
        file.filename or "material.pdf",
        content,
        file.content_type or "application/octet-stream",
    )
    return _respond(service, outcome)


@router.post("/modules/{module_id}/materials/{material_id}/analyze", response_model=LibraryResponse)
@limiter.limit("10/minute")
def analyze_material(
    request: Request,
    module_id: str,
    material_id: str,
    provider: StudyApiClient = Depends(get_content_provider),
    service: LibraryService = Depends(get_library_service),
):
    """Generate summary, quiz and flashcards for a material"""
    material = _find_material(provider, module_id, material_id)
    return _respond(service, service.analyze_material(material))


@router.delete("/modules/{module_id}/materials/{material_id}", response_model=LibraryResponse)
def delete_material(
    module_id: str,
    material_id: str,
    provider: StudyApiClient = Depends(get_content_provider),
    service: LibraryService = Depends(get_library_service),
):
    """Delete a material and its stored file"""
    material = _find_material(provider, module_id, material_id)
    return _respond(service, service.delete_material(material))


@router.get("/modules/{module_id}/materials/{material_id}/file", response_model=LibraryResponse)
def open_material_file(
    module_id: str,
    material_id: str,
    provider: StudyApiClient = Depends(get_content_provider),
    service: LibraryService = Depends(get_library_service),
):
    """Public URL of a material's uploaded document"""
    material = _find_material(provider, module_id, material_id)
    url = service.file_url(material)
    return _respond(service, {"url": url} if url else None)
