"""Job posting quality score."""

from pydantic import BaseModel, ConfigDict, Field


class QualityBreakdown(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    description_length: float = Field(default=0.0, alias="descriptionLength")  # 0-0.30
    has_skills_list: float = Field(default=0.0, alias="hasSkillsList")  # 0-0.25
    has_seniority: float = Field(default=0.0, alias="hasSeniority")  # 0 or 0.15
    has_company: float = Field(default=0.0, alias="hasCompany")  # 0 or 0.10
    specificity: float = 0.0  # 0-0.20

    def total(self) -> float:
        return (
            self.description_length
            + self.has_skills_list
            + self.has_seniority
            + self.has_company
            + self.specificity
        )


class QualityScore(BaseModel):
    """Descriptive richness of a posting, 0-1, with validity against a fixed threshold."""
    model_config = ConfigDict(populate_by_name=True)

    score: float = 0.0
    breakdown: QualityBreakdown = QualityBreakdown()
    is_valid: bool = Field(default=False, alias="isValid")
