from fastapi import APIRouter

from app.api.routes import billing, categories, evaluate, exports, health

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(categories.router, tags=["categories"])
api_router.include_router(evaluate.router, prefix="/evaluate", tags=["evaluate"])
api_router.include_router(exports.router, prefix="/exports", tags=["exports"])
api_router.include_router(billing.router, tags=["billing"])
