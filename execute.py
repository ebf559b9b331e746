import asyncio
import logging
from pathlib import Path
from uuid import uuid4

from core.config import Settings
from schemas.code import CompilerResult

logger = logging.getLogger(__name__)


class InputFileError(Exception):
    """Raised when the submitted code cannot be written to the input file."""


def get_input_path(settings: Settings) -> Path:
    """
    Return the file the next submission is written to.

    In "shared" mode every request uses INPUT_FILE, so two requests in flight
    at the same time may overwrite each other's input. "per_request" mode
    puts a uuid in the name to give each request its own file.
    """
    input_path = Path(settings.INPUT_FILE)
    if settings.INPUT_FILE_MODE == "per_request":
        return input_path.with_name(f"{input_path.stem}-{uuid4().hex}{input_path.suffix}")
    return input_path


async def write_input_file(path: Path, code: str) -> None:
    try:
        await asyncio.to_thread(path.write_bytes, code.encode("utf-8"))
    # lone surrogates from JSON escapes cannot be encoded
    except (OSError, UnicodeEncodeError) as e:
        raise InputFileError(f"Could not write {path}: {e}") from e


async def remove_input_file(path: Path) -> None:
    try:
        await asyncio.to_thread(path.unlink, missing_ok=True)
    except OSError as e:
        logger.warning(f"Could not remove input file {path}: {e}")


async def run_compiler(compiler_path: str, input_path: Path) -> CompilerResult:
    """
    Run the compiler with input_path redirected to its stdin and wait for it.

    A compiler that cannot be started is reported the same way as one that
    exits non-zero: exit_code is set and the error text ends up in stderr.
    """
    try:
        with open(input_path, "rb") as stdin:
            process = await asyncio.create_subprocess_exec(
                compiler_path,
                stdin=stdin,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout_bytes, stderr_bytes = await process.communicate()
    except OSError as e:
        logger.error(f"Could not start compiler {compiler_path}: {e}")
        return CompilerResult(stderr=str(e), exit_code=127, error_type="system")

    stdout = stdout_bytes.decode("utf-8", errors="replace") if stdout_bytes else ""
    stderr = stderr_bytes.decode("utf-8", errors="replace") if stderr_bytes else ""

    return CompilerResult(
        stdout=stdout,
        stderr=stderr,
        exit_code=process.returncode,
        error_type="compile" if process.returncode != 0 else None,
    )
