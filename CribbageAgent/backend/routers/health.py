from fastapi import APIRouter

from CribbageAgent.backend.sessions import list_games


router = APIRouter()


@router.get("/health")
async def health():
    return {"status": "ok", "games": len(list_games())}
