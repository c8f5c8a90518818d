from fastapi import Header, HTTPException

from .config import settings

async def require_api_key(x_api_key: str = Header(default="", alias="X-API-Key")):
    expected = settings.api_key
    if not expected or x_api_key != expected:
        raise HTTPException(status_code=401, detail="unauthorized")
