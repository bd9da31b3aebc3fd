from fastapi import APIRouter, Depends

from dishcart.api.deps import get_store

router = APIRouter(tags=["health"])


@router.get("/health")
def health(store=Depends(get_store)):
    #StoreUnavailable -> 503 przez handler bledow
    store.ping()
    return {"status": "ok"}
