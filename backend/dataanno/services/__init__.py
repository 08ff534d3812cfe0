from dataanno.services.annotation_coordinator import AnnotationCoordinator
from dataanno.services.classification_reconciler import ClassificationReconciler
from dataanno.services.object_store import ObjectStore

__all__ = ["AnnotationCoordinator", "ClassificationReconciler", "ObjectStore"]
