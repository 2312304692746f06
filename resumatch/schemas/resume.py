from pydantic import BaseModel, Field


class ResumeDocument(BaseModel):
    """An uploaded resume file."""

    content: bytes = Field(description="Raw bytes of the uploaded file")
    filename: str | None = Field(default=None, description="Original filename")
    content_type: str | None = Field(default=None, description="Declared media type")


class ResumeInput(BaseModel):
    """Resume sources submitted for one match request.

    Pasted text and an uploaded document may both be given; they are
    concatenated with pasted text first.
    """

    text: str | None = Field(default=None, description="Pasted resume text")
    document: ResumeDocument | None = Field(default=None, description="Uploaded resume file")
