from pydantic import BaseModel
from typing import Optional

class DocumentRequest(BaseModel):
    html: str

class SnapshotRecord(BaseModel):
    epochMs: int
    date: str
    time: str
    profitCents: int
    lossCents: int
    netCents: int
    equityCents: int

class SaveResponse(BaseModel):
    ok: bool
    snapshot: Optional[SnapshotRecord] = None

class HistoryRow(BaseModel):
    epoch_ms: int
    date: str
    time: str
    profit: str
    loss: str
    net: str
    equity: str
    net_positive: bool
