"""
Generation endpoints. Each one checks the user's quota, runs the generator
and only counts the usage once the content was produced and accepted.
"""
import logging

from fastapi import APIRouter, Depends

from content_studio.core.plan_limits import get_user_limits
from content_studio.dependencies.auth import get_current_user
from content_studio.models.user import User
from content_studio.schemas.generate import (
    AudioRequest,
    AudioResponse,
    ImageRequest,
    ImageResponse,
    ScriptRequest,
    ScriptResponse,
    TitleRequest,
    TitleResponse,
)
from content_studio.services.access_control import effective_user_type
from content_studio.services.content_generator import (
    DEFAULT_SCRIPT_LENGTH,
    ContentGenerator,
    get_content_generator,
)
from content_studio.services.usage_service import ResourceKind, increment_resource_usage
from content_studio.stores import Store, get_store
from content_studio.utils.plan_enforcement import (
    enforce_resource_quota,
    enforce_script_content,
    enforce_script_length,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/script", response_model=ScriptResponse)
def generate_script(
    request: ScriptRequest,
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
    generator: ContentGenerator = Depends(get_content_generator),
):
    user_type = effective_user_type(user)
    enforce_resource_quota(store, user.id, user_type, ResourceKind.SCRIPT)
    enforce_script_length(user_type, request.length)

    max_length = get_user_limits(user_type).max_script_length
    script = generator.generate_script(
        request.topic,
        keywords=request.keywords,
        tone=request.tone,
        length=request.length or min(DEFAULT_SCRIPT_LENGTH, max_length),
        max_length=max_length,
    )
    enforce_script_content(user_type, script)

    increment_resource_usage(store, user.id, ResourceKind.SCRIPT)

    return {
        "script": script,
        "message": "Script generated successfully",
        "length": len(script),
        "max_length": max_length,
    }


@router.post("/title", response_model=TitleResponse)
def generate_title(
    request: TitleRequest,
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
    generator: ContentGenerator = Depends(get_content_generator),
):
    enforce_resource_quota(store, user.id, effective_user_type(user), ResourceKind.TITLE)

    title = generator.generate_title(request.topic, keywords=request.keywords)
    increment_resource_usage(store, user.id, ResourceKind.TITLE)

    return {"title": title, "message": "Title generated successfully"}


@router.post("/image", response_model=ImageResponse)
def generate_image(
    request: ImageRequest,
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
    generator: ContentGenerator = Depends(get_content_generator),
):
    enforce_resource_quota(store, user.id, effective_user_type(user), ResourceKind.IMAGE)

    image_url = generator.generate_image(request.prompt, style=request.style)
    increment_resource_usage(store, user.id, ResourceKind.IMAGE)

    return {"image_url": image_url, "message": "Image generated successfully"}


@router.post("/audio", response_model=AudioResponse)
def generate_audio(
    request: AudioRequest,
    user: User = Depends(get_current_user),
    store: Store = Depends(get_store),
    generator: ContentGenerator = Depends(get_content_generator),
):
    enforce_resource_quota(store, user.id, effective_user_type(user), ResourceKind.AUDIO)

    audio_url = generator.generate_audio(request.text, voice=request.voice)
    increment_resource_usage(store, user.id, ResourceKind.AUDIO)

    return {"audio_url": audio_url, "message": "Audio generated successfully"}
