from pydantic import BaseModel
from typing import Literal


class CodeRequest(BaseModel):
    # optional so that a missing field is answered with our own 400
    code: str | None = None


class CompilerResult(BaseModel):
    stdout: str = ""
    stderr: str = ""
    error_type: Literal["compile", "system"] | None = None
    exit_code: int | None = None

    @property
    def ok(self) -> bool:
        return self.error_type is None and self.exit_code == 0
