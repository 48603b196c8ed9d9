from fastapi import APIRouter
from fastapi.responses import RedirectResponse

from workbench.evaluator import evaluator_route
from workbench.library import codecs_route, library_route

prefix_router = APIRouter()

prefix_router.include_router(library_route)
prefix_router.include_router(codecs_route)
prefix_router.include_router(evaluator_route)


@prefix_router.get(
    path="/",
    summary="Redirect to API documentation",
    description="Redirects to the interactive API documentation.",
    include_in_schema=False,
)
async def root() -> RedirectResponse:
    return RedirectResponse(url="/docs")
