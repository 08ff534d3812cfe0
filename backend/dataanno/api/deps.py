from functools import lru_cache

from fastapi import Depends

from dataanno.db.session import TransactionRunner, default_runner
from dataanno.services.annotation_coordinator import AnnotationCoordinator


@lru_cache
def get_runner() -> TransactionRunner:
    return default_runner()


def get_coordinator(runner: TransactionRunner = Depends(get_runner)) -> AnnotationCoordinator:
    return AnnotationCoordinator(runner)
