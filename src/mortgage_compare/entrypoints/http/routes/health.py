from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health", summary="Liveness check")
def health_check() -> dict[str, str]:
    return {"status": "ok"}
