from pydantic import BaseModel


class AnalyticsOverview(BaseModel):
    totalUsers: int
    approvedDoctors: int
    totalClinics: int
    # Keys: new, in-process, pending, approved, rejected
    applicationStatusBreakdown: dict[str, int]


class MonthlyCount(BaseModel):
    month: str
    count: int


class DoctorStatusDistribution(BaseModel):
    active: int = 0
    resigned: int = 0
