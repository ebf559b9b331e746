import os
from dotenv import load_dotenv

load_dotenv()

INPUT_FILE_MODES = ("shared", "per_request")


class Settings:
    PROJECT_NAME: str = "Toy Compiler Bridge"
    PROJECT_VERSION: str = "1.0.0"

    def __init__(self):
        # server settings
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = int(os.getenv("PORT", "3000"))
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        # directory served as the static front end
        self.STATIC_DIR: str = os.getenv("STATIC_DIR", ".")

        # external compiler settings
        self.COMPILER_PATH: str = os.getenv("COMPILER_PATH", "./toy_compiler")
        self.INPUT_FILE: str = os.getenv("INPUT_FILE", "input.txt")

        # "shared" reuses INPUT_FILE for every request, "per_request" writes
        # a uniquely named file next to it and removes it afterwards
        self.INPUT_FILE_MODE: str = os.getenv("INPUT_FILE_MODE", "shared").lower()
        if self.INPUT_FILE_MODE not in INPUT_FILE_MODES:
            raise ValueError(
                f"INPUT_FILE_MODE must be one of {INPUT_FILE_MODES}, "
                f"got {self.INPUT_FILE_MODE!r}"
            )


settings = Settings()


def get_settings() -> Settings:
    return settings
