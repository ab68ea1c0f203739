from sqlalchemy import (
    Boolean,
    Column,
    Index,
    Integer,
    String,
    Text,
    TIMESTAMP,
    text,
)
from sqlalchemy.dialects.postgresql import JSONB

from infrastructure.db.database import Base


class ProposalTemplate(Base):
    """
    System (is_default, created_by NULL) and user-custom estimate templates.
    System rows are owned by the reconciler; user rows by upstream edit flows.
    """

    __tablename__ = "proposal_templates"

    id = Column(Integer, primary_key=True, autoincrement=True)

    trade_id = Column(String(50), nullable=False)
    trade_name = Column(String(100), nullable=False)
    job_type_id = Column(String(50), nullable=False)
    job_type_name = Column(String(200), nullable=False)

    base_scope = Column(JSONB, nullable=False, server_default=text("'[]'::jsonb"))
    options = Column(JSONB, nullable=False, server_default=text("'[]'::jsonb"))
    base_price_low = Column(Integer, nullable=False)
    base_price_high = Column(Integer, nullable=False)
    estimated_days_low = Column(Integer, nullable=True)
    estimated_days_high = Column(Integer, nullable=True)
    warranty = Column(Text, nullable=True)
    exclusions = Column(JSONB, nullable=True)

    is_default = Column(Boolean, nullable=False, server_default=text("TRUE"))
    is_active = Column(Boolean, nullable=False, server_default=text("TRUE"))
    created_by = Column(String, nullable=True)  # NULL = system template

    usage_count = Column(Integer, nullable=False, server_default=text("0"))

    created_at = Column(TIMESTAMP(timezone=True), server_default=text("NOW()"))
    updated_at = Column(TIMESTAMP(timezone=True), server_default=text("NOW()"))

    __table_args__ = (
        Index("idx_templates_trade_job", "trade_id", "job_type_id"),
        Index("idx_templates_created_by", "created_by"),
        # one system row per job type; user rows may reuse the id
        Index(
            "uq_templates_default_job_type",
            "job_type_id",
            unique=True,
            postgresql_where=text("is_default"),
        ),
    )
