from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from notetake.api.deps import get_image_host
from notetake.core.attachments import ImageHost
from notetake.models.media import DeleteImageOut, DeleteImageRequest, UploadOut
from notetake.utils.logging import get_logger

router = APIRouter(prefix="/api", tags=["media"])
logger = get_logger(__name__)


@router.post("/upload", response_model=UploadOut)
async def upload_image(
    file: UploadFile | None = File(default=None),
    host: ImageHost = Depends(get_image_host),
) -> UploadOut:
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Only image uploads are allowed")

    content = await file.read()
    try:
        image = await host.upload(file.filename or "upload", content, file.content_type)
    except Exception as err:
        logger.error("Cloudinary upload error", extra={"upload_filename": file.filename, "error": str(err)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to upload image"
        ) from err

    logger.info("File uploaded to Cloudinary", extra={"public_id": image.public_id})
    return UploadOut(url=image.url, public_id=image.public_id)


@router.delete("/delete-image", response_model=DeleteImageOut)
async def delete_image(
    payload: DeleteImageRequest,
    host: ImageHost = Depends(get_image_host),
) -> DeleteImageOut:
    if not payload.public_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No public ID provided")

    try:
        await host.delete(payload.public_id)
    except Exception as err:
        logger.error("Cloudinary deletion error", extra={"public_id": payload.public_id, "error": str(err)})
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete image from Cloudinary",
        ) from err

    return DeleteImageOut(success=True)
