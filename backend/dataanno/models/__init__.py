from dataanno.models.annotation_classification import ClassificationValue
from dataanno.models.annotation_object import AnnotationObject
from dataanno.models.data_record import DataRecord

__all__ = ["AnnotationObject", "ClassificationValue", "DataRecord"]
