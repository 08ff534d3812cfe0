from dataanno.schemas.annotations import (
    AnnotationResult,
    AnnotationSaveRequest,
    AnnotationSaveResponse,
    ClassificationAnnotation,
    ObjectAnnotation,
)
from dataanno.schemas.data_records import DataRecordCreate, DataRecordOut

__all__ = [
    "AnnotationResult",
    "AnnotationSaveRequest",
    "AnnotationSaveResponse",
    "ClassificationAnnotation",
    "DataRecordCreate",
    "DataRecordOut",
    "ObjectAnnotation",
]
