from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func

from comicshelf.core.database import Base


class Document(Base):
    """
    A JSON document addressed by a slash-separated path.

    The final path segment is the document id; everything before it is
    the collection, e.g. ``users/<uid>/inventory/<id>``.
    """
    __tablename__ = "documents"

    path = Column(String, primary_key=True)
    collection = Column(String, nullable=False, index=True)
    doc_id = Column(String, nullable=False)

    data = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
