from fastapi import Depends, Header, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID
from huma.db.session import get_db

def get_current_user_id(x_user_id: str | None = Header(default=None)) -> UUID:
    """
    Caller identity as forwarded by the gateway in X-User-Id.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Unauthorized: Missing X-User-Id header")
    try:
        return UUID(x_user_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="Unauthorized: Invalid User ID") from None

def Authed(db: AsyncSession = Depends(get_db), user_id: UUID = Depends(get_current_user_id)):
    return {"db": db, "user_id": user_id}
