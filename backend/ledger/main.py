"""FastAPI app entrypoint."""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ledger.config import ALLOWED_ORIGINS
from ledger.errors import ReconciliationError
from ledger.log_config import configure_logging, get_logger
from ledger.routers import members, expenses, settlements

configure_logging()
logger = get_logger(__name__)

app = FastAPI(
    title="Household Ledger API",
    description="Track shared household expenses and see who owes whom.",
    version="1.0.0",
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(members.router, prefix="/api")
app.include_router(expenses.router, prefix="/api")
app.include_router(settlements.router, prefix="/api")


@app.exception_handler(ReconciliationError)
def reconciliation_error_handler(request: Request, exc: ReconciliationError):
    logger.error("settlement_reconciliation_failed", path=request.url.path, residual=round(exc.residual, 2))
    return JSONResponse(status_code=409, content={"detail": str(exc), "residual": round(exc.residual, 2)})


@app.get("/")
def root():
    return {"message": "Household Ledger API", "docs": "/docs"}
