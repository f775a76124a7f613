import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from models import FunctionRunResult, RunInput, StoredRunInput
from firebase_util import fetch_metafield_value
from volume_discount import OutputProtocol, run, run_with_configuration

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI()

# Allow frontend CORS
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "http://127.0.0.1:5500").split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# 1. EVALUATE WITH INLINE CONFIGURATION
@app.post(
    "/api/discounts/{protocol}/run",
    response_model=FunctionRunResult,
    response_model_exclude_none=True,
)
def run_discount(protocol: OutputProtocol, body: RunInput):
    return run(body, protocol)


# 2. EVALUATE WITH STORED CONFIGURATION
@app.post(
    "/api/discounts/{protocol}/run-stored",
    response_model=FunctionRunResult,
    response_model_exclude_none=True,
)
def run_stored_discount(protocol: OutputProtocol, body: StoredRunInput):
    blob = fetch_metafield_value()
    if blob is None:
        logger.info("No stored configuration, returning empty discount")

    return run_with_configuration(blob, body.cart, protocol)
