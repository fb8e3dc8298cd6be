from sqlalchemy import JSON, Boolean, Column, Date, DateTime, String, Text, func

from app.db.base import Base


class ContentRecord(Base):
    __tablename__ = "content"

    kind = Column(String(16), primary_key=True, server_default="post")
    slug = Column(String(512), primary_key=True)
    title = Column(Text, nullable=False)
    date = Column(Date, nullable=False)
    tags = Column(JSON, nullable=False, default=list)
    summary = Column(Text)
    draft = Column(Boolean)  # NULL when the front matter has no draft flag
    body = Column(Text, nullable=False, default="")
    source_path = Column(String(1024), nullable=False)
    checksum = Column(String(64), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
