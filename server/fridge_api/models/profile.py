"""Health profile view model."""
from pydantic import BaseModel, Field, ConfigDict

from fridge_ai.models import UserHealthProfile


class ProfileResponse(BaseModel):
    """Saved health profile plus derived BMI."""

    model_config = ConfigDict(populate_by_name=True)

    profile: UserHealthProfile
    is_saved: bool = Field(serialization_alias="isSaved")
    bmi: float
    bmi_category: str = Field(serialization_alias="bmiCategory")

    @classmethod
    def from_profile(cls, profile: UserHealthProfile, is_saved: bool) -> "ProfileResponse":
        return cls(
            profile=profile,
            is_saved=is_saved,
            bmi=round(profile.bmi, 1),
            bmi_category=profile.bmi_category,
        )
