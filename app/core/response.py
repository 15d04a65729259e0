# app/core/response.py

from fastapi.encoders import jsonable_encoder

DEFAULT_SUCCESS_MESSAGE = "Your request has been successfully processed"
DEFAULT_ERROR_MESSAGE = "Your request has failed to process"


def success(data=None, message: str = "") -> dict:
    return {
        "success": True,
        "message": message or DEFAULT_SUCCESS_MESSAGE,
        "data": jsonable_encoder(data),
    }


def error(message: str = "", errors: dict[str, list[str]] | None = None) -> dict:
    return {
        "success": False,
        "message": message or DEFAULT_ERROR_MESSAGE,
        "errors": errors or {},
    }
