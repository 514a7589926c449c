from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class GeneratePlanRequest(BaseModel):
    ingredients: Optional[List[str]] = Field(default=None, examples=[["chicken", "rice", "garlic"]])


class RecipeSuggestion(BaseModel):
    # Keys come straight from the model output, so unknown ones are kept
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(..., min_length=1, examples=["Tomato Soup"])
    ingredients: List[str] = Field(..., examples=[["tomato", "salt"]])
    instructions: str = Field(..., examples=["Boil and blend."])
    cooking_time: Optional[str] = Field(default=None, alias="cookingTime")
    difficulty: Optional[str] = None


class ErrorOut(BaseModel):
    error: str
