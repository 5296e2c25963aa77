import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text

from comicshelf.core.config import get_settings
from comicshelf.core.database import get_db, init_db
from comicshelf.routers import ingestion, inventory_items, metadata, staging_items


settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)


@asynccontextmanager
async def lifespan(_app: FastAPI):
    init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(metadata.router)
app.include_router(ingestion.router)
app.include_router(inventory_items.router)
app.include_router(staging_items.router)


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.get("/db-test")
def db_test(db: Session = Depends(get_db)):
    result = db.execute(text("SELECT 1")).scalar()
    return {"db_response": result}
