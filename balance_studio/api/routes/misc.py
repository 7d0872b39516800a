from fastapi import APIRouter

router = APIRouter(tags=["misc"])


@router.get("/health")
def health():
    return {"status": "ok"}
