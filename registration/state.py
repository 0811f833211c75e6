from enum import Enum
from typing import Annotated, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr

FormValues = Dict[str, str]
ErrorMap = Dict[str, str]


class FormPhase(str, Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"
    REJECTED = "rejected"
    ACCEPTED = "accepted"


class RegistrationData(BaseModel):
    model_config = ConfigDict(frozen=True)

    nome: str = Field(description="User's full name")
    email: str = Field(description="User email")
    telefone: str = Field(description="Phone as (00) 00000-0000")
    senha: SecretStr = Field(description="Password, masked in repr and logs")


SanitizedValues = Dict[str, Union[str, SecretStr]]


class Accepted(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["accepted"] = "accepted"
    # RegistrationData for the registration field set, a plain map otherwise
    data: Union[RegistrationData, SanitizedValues]


class Rejected(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["rejected"] = "rejected"
    errors: ErrorMap


SubmissionOutcome = Annotated[Union[Accepted, Rejected], Field(discriminator="kind")]


class FormState(BaseModel):
    values: FormValues = Field(default_factory=dict)
    errors: ErrorMap = Field(default_factory=dict)
    success: bool = Field(default=False, description="Confirmation banner visible")
    phase: FormPhase = FormPhase.EDITING

    # bumped on every acceptance; a success timer only acts on its own token
    success_token: int = 0
    outcome: Optional[SubmissionOutcome] = None
