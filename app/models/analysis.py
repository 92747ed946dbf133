from enum import Enum
from typing import List
from pydantic import BaseModel, ConfigDict, Field


class Gender(str, Enum):
    ALL = "Semua"
    MALE = "Pria"
    FEMALE = "Wanita"


GENDER_LABELS = {
    Gender.ALL: "Semuanya Boleh",
    Gender.MALE: "Cowok",
    Gender.FEMALE: "Cewek",
}


class PurchaseLikelihood(str, Enum):
    LOW = "Rendah"
    MEDIUM = "Sedang"
    HIGH = "Tinggi"


class AnalysisCriteriaKey(str, Enum):
    INTERACTIVITY = "interactivity"
    ENTERTAINMENT = "entertainment"
    RELEVANCE = "relevance"
    INFORMATIVENESS = "informativeness"


class TargetAudience(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    ageMin: str = "18"
    ageMax: str = "35"
    gender: Gender = Gender.ALL
    location: str = ""
    interests: str = ""


class InstagramContent(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    link: str = ""
    caption: str = ""


class CriteriaReport(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    score: int = Field(ge=0, le=10, strict=True)
    explanation: str


class PurchaseInfluence(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    likelihood: PurchaseLikelihood
    explanation: str


class AnalysisReport(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    interactivity: CriteriaReport
    entertainment: CriteriaReport
    relevance: CriteriaReport
    informativeness: CriteriaReport
    purchaseInfluence: PurchaseInfluence
    overallSummary: str
    suggestions: List[str]

    def criteria(self) -> dict[AnalysisCriteriaKey, CriteriaReport]:
        return {key: getattr(self, key.value) for key in AnalysisCriteriaKey}


class GenderOption(BaseModel):
    value: Gender
    label: str


class AnalysisRequest(BaseModel):
    audience: TargetAudience = Field(default_factory=TargetAudience)
    content: InstagramContent = Field(default_factory=InstagramContent)


class FieldChange(BaseModel):
    field: str
    value: str
