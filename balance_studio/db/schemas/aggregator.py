import uuid
from datetime import datetime
from pydantic import BaseModel, Field

from ...core.constants import DEFAULT_AGGREGATOR, DEFAULT_AGGREGATOR_REVENUE


class AggregatorVisitCreate(BaseModel):
    aggregator: str = DEFAULT_AGGREGATOR
    class_id: uuid.UUID | None = None
    note: str | None = None
    revenue: int = Field(default=DEFAULT_AGGREGATOR_REVENUE, ge=0)


class AggregatorVisit(BaseModel):
    id: uuid.UUID
    aggregator_name: str
    class_id: uuid.UUID | None = None
    class_name: str | None = None
    class_start_time: datetime | None = None
    revenue: int
    note: str | None = None
    visit_date: datetime

    class Config:
        from_attributes = True


class AggregatorVisitList(BaseModel):
    total_revenue: int
    visits: list[AggregatorVisit]


class AggregatorMonthSummary(BaseModel):
    aggregator_name: str
    visits: int
    revenue: int
