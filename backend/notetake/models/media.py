from pydantic import BaseModel


class UploadOut(BaseModel):
    url: str
    public_id: str


class DeleteImageRequest(BaseModel):
    # optional so a missing id answers 400 rather than a validation 422
    public_id: str | None = None


class DeleteImageOut(BaseModel):
    success: bool = True


class ExportPdfRequest(BaseModel):
    html: str | None = None
