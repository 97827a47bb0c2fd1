import logging
import logging.handlers
import os
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, ValidationError

from gorilli.actions import GORILLI_ACTIONS, GorilliAction, get_action
from gorilli.utils import get_logger
from gorilli.wallet_provider import create_wallet_provider

logger = get_logger(__name__)

# File handler with rotation, only when a log directory is configured
log_dir = os.getenv("LOG_DIR")
if log_dir:
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, f"gorilli_api_{datetime.now().strftime('%Y%m%d')}.log")
    file_handler = logging.handlers.RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    logger.addHandler(file_handler)

ERROR_PREFIXES = ("Error", "An unknown error")

app = FastAPI(
    title="Gorilli Actions API",
    version="0.1.0",
    description="HTTP access to the gorilli agent actions: deploy ERC-4626 vaults, trade, and interact with vaults.",
    docs_url="/docs",
    redoc_url="/redoc",
)

origins = [origin for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",") if origin]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization"],
)


class ActionRequest(BaseModel):
    args: Dict[str, Any] = Field(default_factory=dict)


class ActionResponse(BaseModel):
    status: str
    message: str


class ActionInfo(BaseModel):
    name: str
    description: str
    parameters: Dict[str, Any]


def get_wallet(action: GorilliAction) -> Optional[Any]:
    """Wallet for actions that sign through it, created on first use and kept on app.state."""
    if not action.needs_wallet:
        return None
    wallet = getattr(app.state, "wallet", None)
    if wallet is None:
        try:
            wallet = create_wallet_provider()
        except (EnvironmentError, ValueError) as e:
            logger.error(f"Failed to initialize wallet: {e}")
            raise HTTPException(status_code=503, detail={"error": f"Wallet unavailable: {e}"})
        app.state.wallet = wallet
    return wallet


@app.exception_handler(Exception)
async def custom_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": f"An unexpected error occurred: {str(exc)}"},
    )


@app.get("/", summary="Root endpoint for health checks", response_model=dict)
async def root():
    return {"status": "healthy"}


@app.get("/health", summary="Check API health", response_model=dict)
async def health():
    return {"status": "healthy"}


@app.get("/actions", summary="List available actions", response_model=List[ActionInfo])
async def list_actions():
    return [
        ActionInfo(name=action.name, description=action.description.strip(), parameters=action.parameters())
        for action in GORILLI_ACTIONS
    ]


@app.post("/actions/{name}", summary="Run an action", response_model=ActionResponse)
def run_action(name: str, request: ActionRequest, req: Request):
    client_ip = req.client.host if req.client else "unknown"
    logger.info(f"Received request for action {name} from IP: {client_ip}")
    try:
        action = get_action(name)
    except KeyError:
        raise HTTPException(status_code=404, detail={"error": f"Unknown action: {name}"})

    wallet = get_wallet(action)
    try:
        message = action.invoke(wallet, request.args)
    except ValidationError as ve:
        logger.warning(f"Validation error in {name}: {ve}")
        raise HTTPException(status_code=422, detail=ve.errors(include_url=False, include_context=False))
    except Exception as e:
        logger.error(f"Error running {name}: {e} from IP: {client_ip}", exc_info=True)
        raise HTTPException(status_code=500, detail={"error": str(e)})

    if message.startswith(ERROR_PREFIXES):
        logger.warning(f"Action {name} failed: {message} from IP: {client_ip}")
        raise HTTPException(status_code=400, detail={"error": message})

    logger.info(f"Action {name} executed successfully.")
    return ActionResponse(status="success", message=message)


def main():
    import uvicorn

    port = int(os.getenv("PORT", 8000))
    logger.info(f"Starting Uvicorn server on port {port}")
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
