from pydantic import BaseModel, Field
from typing import List, Optional

# Attribute names are snake_case; the JSON keys are the camelCase names the
# dashboard client reads (FastAPI serializes response models by alias).


class KPI(BaseModel):
    total_pl: float = Field(0.0, alias="totalPL")
    win_rate: float = Field(0.0, alias="winRate", ge=0.0, le=100.0)
    total_trades: int = Field(0, alias="totalTrades", ge=0)
    profit_factor: float = Field(0.0, alias="profitFactor", ge=0.0)
    avg_win: float = Field(0.0, alias="avgWin")
    avg_loss: float = Field(0.0, alias="avgLoss")  # Negative or zero, not a magnitude

    class Config:
        populate_by_name = True


class Metrics(BaseModel):
    sharpe_ratio: float = Field(0.0, alias="sharpeRatio")
    max_drawdown: float = Field(0.0, alias="maxDrawdown", le=0.0)  # Percent, e.g. -12.5
    avg_win: float = Field(0.0, alias="avgWin")
    avg_loss: float = Field(0.0, alias="avgLoss")
    largest_win: float = Field(0.0, alias="largestWin")
    largest_loss: float = Field(0.0, alias="largestLoss")  # Most negative single day

    class Config:
        populate_by_name = True


class ChartPoint(BaseModel):
    date: str  # YYYY-MM-DD
    value: float


class Charts(BaseModel):
    daily: List[ChartPoint] = []
    cumulative: List[ChartPoint] = []


class DateRange(BaseModel):
    date_from: Optional[str] = Field(None, alias="from")
    date_to: Optional[str] = Field(None, alias="to")

    class Config:
        populate_by_name = True


class DashboardSummary(BaseModel):
    kpi: KPI = Field(default_factory=KPI)
    metrics: Metrics = Field(default_factory=Metrics)
    charts: Charts = Field(default_factory=Charts)
    range: DateRange = Field(default_factory=DateRange)
