"""Translation of operation failures into HTTP errors."""

from decimal import Decimal
from typing import TypeVar

from fastapi import HTTPException
from fastapi.encoders import jsonable_encoder

from league.core.results import FailureReason, OperationResult

T = TypeVar("T")

STATUS_BY_REASON: dict[FailureReason, int] = {
    FailureReason.INVALID_INPUT: 400,
    FailureReason.INSUFFICIENT_FUNDS: 400,
    FailureReason.UNAUTHORIZED: 403,
    FailureReason.NOT_FOUND: 404,
    FailureReason.SEASON_ALREADY_ACTIVE: 409,
    FailureReason.NO_ACTIVE_SEASON: 409,
}


def unwrap(result: OperationResult[T]) -> T:
    """
    Return the result's value or raise the matching HTTPException.

    A refused result that still carries a value (a rejected withdrawal)
    exposes it under `detail["value"]`, money kept as strings.
    """
    if result.ok:
        return result.value
    detail = {"error": result.failure.value, "message": result.message}
    if result.value is not None:
        detail["value"] = jsonable_encoder(result.value, custom_encoder={Decimal: str})
    raise HTTPException(
        status_code=STATUS_BY_REASON.get(result.failure, 400),
        detail=detail,
    )
