from datetime import date

from pydantic import BaseModel, ConfigDict, Field


class MemberIn(BaseModel):
    """Registration form, validated before anything touches the store."""

    model_config = ConfigDict(str_strip_whitespace=True)

    full_name: str = Field(..., min_length=1)
    dob: date = Field(..., description="YYYY-MM-DD")
    gender: str | None = None
    email: str = Field(..., min_length=3, pattern=r"^[^@\s]+@[^@\s]+$")
    phone: str | None = None


class GoalIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    goal_text: str = Field(..., min_length=1)


class MetricIn(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    metric_type: str = Field(..., min_length=1, examples=["weight", "heart_rate"])
    value: float = Field(..., allow_inf_nan=False)
