from typing import Optional

from pydantic import BaseModel, Field


class ScriptRequest(BaseModel):
    topic: str = Field(..., min_length=1, max_length=300)
    keywords: Optional[str] = Field(None, max_length=500)
    tone: Optional[str] = Field(None, max_length=50)
    length: Optional[int] = Field(None, gt=0)  # Desired script length in characters


class ScriptResponse(BaseModel):
    script: str
    message: str
    length: int
    max_length: int


class TitleRequest(BaseModel):
    topic: str = Field(..., min_length=1, max_length=300)
    keywords: Optional[str] = Field(None, max_length=500)


class TitleResponse(BaseModel):
    title: str
    message: str


class ImageRequest(BaseModel):
    prompt: str = Field(..., min_length=1, max_length=1000)
    style: Optional[str] = Field(None, max_length=50)


class ImageResponse(BaseModel):
    image_url: str
    message: str


class AudioRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=10000)
    voice: Optional[str] = Field(None, max_length=50)


class AudioResponse(BaseModel):
    audio_url: str
    message: str
