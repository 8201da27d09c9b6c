# backend/app/schemas/tutor_schemas.py
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, AliasChoices
from typing import List, Optional


class LearningMode(str, Enum):
    HAND_HOLDING = "hand-holding"   # starter snippet with blanks
    CHALLENGE = "challenge"         # write from scratch, no snippet


# ---------------------------------------------------------------
# Learning plan
# ---------------------------------------------------------------
class LearningStep(BaseModel):
    model_config = ConfigDict(frozen=True)

    topic: str
    description: str
    extracted_documentation: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("extracted_documentation", "extractedDocumentation"),
    )
    extracted_example_code: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("extracted_example_code", "extractedExampleCode"),
    )


class LearningPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    learning_steps: List[LearningStep] = Field(
        validation_alias=AliasChoices("learning_steps", "learningSteps"),
    )


class GenerateLearningPlanInput(BaseModel):
    content: str = ""
    documentation_url: Optional[str] = None
    code_url: Optional[str] = None

    def has_source(self) -> bool:
        return any(
            (value or "").strip()
            for value in (self.content, self.documentation_url, self.code_url)
        )


# ---------------------------------------------------------------
# Exercise
# ---------------------------------------------------------------
class GenerateExerciseInput(BaseModel):
    topic: str
    documentation: str
    example_code: str
    learning_mode: LearningMode = LearningMode.HAND_HOLDING


class GenerateExerciseOutput(BaseModel):
    model_config = ConfigDict(frozen=True)

    question: str
    code_snippet: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("code_snippet", "codeSnippet"),
    )
    solution: str


# ---------------------------------------------------------------
# Code review / explanation
# ---------------------------------------------------------------
class ImproveCodeInput(BaseModel):
    code: str
    language: str = "python"
    question: Optional[str] = None


class ImproveCodeOutput(BaseModel):
    improvements: str


class ExplainConceptInput(BaseModel):
    concept: str
    documentation: str
    example_code: str


class ExplainConceptOutput(BaseModel):
    model_config = ConfigDict(frozen=True)

    explanation: str
    breakdown: str
    application: str
