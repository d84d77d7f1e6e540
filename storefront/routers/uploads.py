# storefront/routers/uploads.py
from fastapi import APIRouter, Depends, File, Request, UploadFile, status

from storefront.core.auth import require_admin
from storefront.core.config import Settings, get_app_settings
from storefront.schemas.admin import UploadedFileRead, UploadRead
from storefront.schemas.content import MessageResponse
from storefront.services.upload_service import UploadService

router = APIRouter(tags=["Uploads"], dependencies=[Depends(require_admin)])


def get_upload_service(settings: Settings = Depends(get_app_settings)) -> UploadService:
    """Upload service bound to the settings the running app was built with."""
    return UploadService(settings.UPLOAD_DIR, settings.MAX_UPLOAD_BYTES)


@router.post(
    "/upload",
    response_model=UploadRead,
    status_code=status.HTTP_201_CREATED,
    summary="Upload an image",
)
def upload_image(
    request: Request,
    file: UploadFile = File(...),
    service: UploadService = Depends(get_upload_service),
):
    """
    Store an image and return its public URL.

    - Accepts JPEG, PNG, WEBP, GIF.
    - `url` is the site-relative path, `absolute_url` includes the host.
    """
    url = service.store(file.content_type, file.file.read())
    return UploadRead(
        url=url,
        absolute_url=str(request.base_url).rstrip("/") + url,
    )


@router.get("/uploads/list", response_model=list[UploadedFileRead])
def list_uploaded_files(service: UploadService = Depends(get_upload_service)):
    return service.list_files()


@router.delete("/uploads/{filename}", response_model=MessageResponse)
def delete_uploaded_file(
    filename: str,
    service: UploadService = Depends(get_upload_service),
):
    service.delete(filename)
    return MessageResponse(message="File deleted")
