from uuid import UUID

from fastapi import Header, HTTPException


def get_current_user(x_user_id: str = Header(...)) -> UUID:
    """Stub authentication - extracts user_id from header"""
    try:
        return UUID(x_user_id)
    except (ValueError, AttributeError):
        raise HTTPException(status_code=401, detail="Invalid user ID")
