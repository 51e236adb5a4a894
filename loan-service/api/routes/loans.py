import logging
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api.schemas.loans import LoanHistoryRequest, LoanRecord, LoanRequest, LoanResponse
from config import Config
from db.database import get_db
from services.exceptions import StaleAccountError
from services.loan_service import LoanService, build_loan_service

logging.basicConfig(level=Config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(title="Loan Service", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=Config.CORS_ORIGINS.split(","),
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # drop the echoed input: NaN/Infinity amounts are not valid JSON in a response
    errors = [
        {key: value for key, value in error.items() if key not in ("input", "ctx")}
        for error in exc.errors()
    ]
    return JSONResponse(status_code=422, content={"detail": errors})


def get_loan_service(db: Session = Depends(get_db)) -> LoanService:
    return build_loan_service(db)


@app.get("/health-check/")
def loan_health_check():
    return {"loan": "Health Check OK"}


@app.post("/loan/request", response_model=LoanResponse)
def process_loan_request(payload: LoanRequest, service: LoanService = Depends(get_loan_service)):
    logger.debug("Request: %s", payload)
    try:
        return service.process_loan_request(payload)
    except StaleAccountError as exc:
        logger.warning("Concurrent balance update rejected: %s", exc)
        raise HTTPException(status_code=409, detail="Account was modified concurrently, retry the request")
    except SQLAlchemyError as exc:
        logger.exception("Loan request failed (DB error): %s", exc)
        raise HTTPException(status_code=500, detail="Loan service unavailable")


@app.post("/loan/history", response_model=List[LoanRecord])
def get_loan_history(payload: LoanHistoryRequest, service: LoanService = Depends(get_loan_service)):
    logger.debug("Request: /loan/history for %s", payload.email)
    try:
        loans = service.get_loan_history(payload.email)
        return [LoanRecord.model_validate(loan) for loan in loans]
    except SQLAlchemyError as exc:
        logger.exception("Loan history lookup failed (DB error): %s", exc)
        raise HTTPException(status_code=500, detail="Loan service unavailable")
