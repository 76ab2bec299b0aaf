"""V1 API router aggregation."""

from fastapi import APIRouter

from dodo.api.v1.corpus import router as corpus_router
from dodo.api.v1.documents import router as documents_router
from dodo.api.v1.suggestions import router as suggestions_router

v1_router = APIRouter(prefix="/v1")
v1_router.include_router(documents_router)
v1_router.include_router(suggestions_router)
v1_router.include_router(corpus_router)
