from typing import Any, Dict, List

from pydantic import BaseModel, Field


class ReportResponse(BaseModel):
    report: str = Field(..., description="Report name.")
    rows: List[Dict[str, Any]] = Field(..., description="Result rows keyed by column name.")
