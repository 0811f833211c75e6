import os
from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


class FormConfig(BaseModel):
    success_display_seconds: float = Field(default=5.0, gt=0)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "FormConfig":
        return cls(
            success_display_seconds=os.getenv("REGISTRATION_SUCCESS_SECONDS", "5.0"),
            log_level=os.getenv("REGISTRATION_LOG_LEVEL", "INFO").upper(),
        )
