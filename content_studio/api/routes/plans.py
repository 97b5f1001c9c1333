from fastapi import APIRouter

from content_studio.core.plan_limits import plan_catalog
from content_studio.schemas.usage import PlanCatalogResponse

router = APIRouter()


@router.get("", response_model=PlanCatalogResponse)
def list_plans():
    """Limits of every plan, for the plan comparison page. Public."""
    return {"plans": plan_catalog()}
