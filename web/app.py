"""
FastAPI application setup for the crowdfund dashboard Web UI.
"""

from dotenv import load_dotenv
from fastapi import FastAPI

from . import __version__ as WEB_VERSION
from .routes import router

# Load .env file (if present) so CROWDFUND_* settings are available via os.environ
load_dotenv()

# App
app = FastAPI(
    title="crowdfund-dashboard",
    description="Read model and transaction orchestration for a crowdfunding ledger contract",
    version=WEB_VERSION,
)

# Include API routes
app.include_router(router)
