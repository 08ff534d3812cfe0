from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from dataanno.api.deps import get_coordinator
from dataanno.core.errors import ConflictError, NotFoundError, ValidationError
from dataanno.schemas.annotations import AnnotationResult, AnnotationSaveRequest, AnnotationSaveResponse
from dataanno.services.annotation_coordinator import AnnotationCoordinator

router = APIRouter(prefix="/annotations", tags=["annotations"])


@router.post("", response_model=AnnotationSaveResponse)
async def save_annotations(
    payload: AnnotationSaveRequest,
    coordinator: AnnotationCoordinator = Depends(get_coordinator),
) -> AnnotationSaveResponse:
    try:
        saved = await coordinator.save(payload.classifications, payload.objects, payload.deleted_data_ids)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.message)
    except NotFoundError as exc:
        raise HTTPException(status_code=404, detail=exc.message)
    except ConflictError as exc:
        raise HTTPException(status_code=409, detail=exc.message)
    return AnnotationSaveResponse(objects=saved)


@router.get("", response_model=list[AnnotationResult])
async def find_annotations(
    data_ids: list[UUID] = Query(...),
    coordinator: AnnotationCoordinator = Depends(get_coordinator),
) -> list[AnnotationResult]:
    return await coordinator.find_by_data_ids(data_ids)
