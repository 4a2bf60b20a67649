from contextlib import contextmanager

from fastapi import HTTPException

from secure_payload.core.errors import PayloadError

from .logger import Logger

__all__ = ["payload_error_handler"]

logger = Logger(__name__).get_logger()


@contextmanager
def payload_error_handler(stacklevel=1):
    """Translate core failures raised inside the block into HTTP errors.

    ``PayloadError`` means the client sent something we cannot use (400);
    anything else is ours (500). ``HTTPException`` passes through.
    """
    # Go 3 levels up to escape @contextmanager methods and current function
    stack_level = 2 + stacklevel
    kw = {"stacklevel": stack_level}
    try:
        yield

    except HTTPException:
        raise

    except PayloadError as e:
        logger.warning("Rejected payload (%s): %s", type(e).__name__, e, **kw)
        raise HTTPException(status_code=400, detail=f"Invalid payload: {e}") from e

    except Exception as e:
        logger.error("Failed to process request: %s", e, **kw)
        raise HTTPException(status_code=500, detail=str(e)) from e
