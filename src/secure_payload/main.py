from fastapi import (
    FastAPI,
)

from secure_payload.routers import get_routers
from secure_payload.shared import Logger, load_config

logger = Logger(__name__).get_logger()

config = load_config()


# ================================================================================
#       FastAPI Setup
# ================================================================================
app = FastAPI(title="secure-payload")

for router in get_routers():
    app.include_router(router)


# ================================================================================
#       Command Line
# ================================================================================
def welcome():
    # Log server banner
    for line in config.general.title.split("\n"):
        logger.info(line)

    logger.info(
        "Starting webhook receiver (schema: %s, iv: %s)",
        config.merchant.payload_schema,
        config.merchant.iv_strategy,
    )


def main(argv=None):
    welcome()

    import uvicorn

    uvicorn.run(
        "secure_payload.main:app",
        host=config.network.host,
        port=config.network.port,
        reload=config.network.reload,
    )


if __name__ == "__main__":
    main()
