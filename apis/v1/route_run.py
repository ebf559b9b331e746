import json
import logging
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from core.config import Settings, get_settings
from execute import (
    InputFileError,
    get_input_path,
    remove_input_file,
    run_compiler,
    write_input_file,
)
from schemas.code import CodeRequest

router = APIRouter()
logger = logging.getLogger(__name__)


async def read_code_request(request: Request) -> CodeRequest | None:
    """
    Parse the body leniently: anything that is not a JSON object with a
    string "code" field comes back as None instead of a 422.
    """
    try:
        body = await request.json()
        return CodeRequest.model_validate(body)
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError):
        return None


@router.post("/run", response_class=PlainTextResponse)
async def run_code(
    request: Request, settings: Settings = Depends(get_settings)
) -> PlainTextResponse:
    code_request = await read_code_request(request)
    if code_request is None or not code_request.code:
        return PlainTextResponse(
            "No code received", status_code=status.HTTP_400_BAD_REQUEST
        )

    input_path = get_input_path(settings)
    logger.info(f"Received {len(code_request.code)} characters, writing to {input_path}")

    try:
        await write_input_file(input_path, code_request.code)
    except InputFileError as e:
        logger.error(str(e))
        return PlainTextResponse(
            "Error writing input file",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    try:
        result = await run_compiler(settings.COMPILER_PATH, input_path)
    finally:
        if settings.INPUT_FILE_MODE == "per_request":
            await remove_input_file(input_path)

    if not result.ok:
        logger.warning(
            f"Compiler failed error_type={result.error_type} exit_code={result.exit_code}"
        )
        return PlainTextResponse(
            f"Compiler error:\n{result.stderr}",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return PlainTextResponse(result.stdout)
