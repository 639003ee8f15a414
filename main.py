from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from query_lab.services.query_filters import __version__
from query_lab.services.query_filters.main import router as filters_router
from query_lab.utility.constants_manager import ConstantsManager

constants = ConstantsManager()

# Configure logging
logging.basicConfig(level=constants.get_log_level())
logger = logging.getLogger(__name__)


app = FastAPI(title="Query Lab", version=__version__)

app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(filters_router)


@app.get("/health")
async def health():
    return {"status": "ok", "version": __version__}


logger.info(f"Query Lab {__version__} ready (delimiter={constants.get_delimiter()!r})")
