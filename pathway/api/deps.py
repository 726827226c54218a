from collections.abc import Generator
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from pathway.db import SessionLocal
from pathway.session import ProgramSession
from pathway.store import RecordStore


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_program_session(
    x_user_id: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> ProgramSession:
    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(status_code=401, detail="X-User-Id header is required")
    return ProgramSession(user_id=user_id, store=RecordStore(db))
