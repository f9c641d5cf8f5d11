from fastapi import HTTPException

from studiodesk.api.v1.schemas import OperationResultSchema
from studiodesk.domain.entities.result import ErrorKind, OperationResult


def result_or_raise(result: OperationResult) -> OperationResultSchema:
    """Return the result body, or raise with a status matching the failure kind."""
    if result.success:
        return OperationResultSchema.from_result(result)
    status_code = 404 if result.error == ErrorKind.not_found else 409
    raise HTTPException(
        status_code=status_code,
        detail={"error": result.error.value if result.error else None, "message": result.message},
    )
