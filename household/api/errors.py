from contextlib import contextmanager

from fastapi import HTTPException

from household.domain.errors import NotFoundError, ValidationError


@contextmanager
def http_errors():
    """Report core errors as HTTP errors: ValidationError -> 400, NotFoundError -> 404."""
    try:
        yield
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
