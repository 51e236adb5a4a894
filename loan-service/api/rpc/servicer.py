import logging
from concurrent import futures
from typing import Tuple

import grpc
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from api.schemas.loans import LoanRecord, LoanRequest
from db.database import SessionLocal
from services.exceptions import StaleAccountError
from services.loan_service import build_loan_service

from . import loan_messages as pb

logger = logging.getLogger(__name__)

_REQUEST_FIELDS = [name for name, *_ in pb.MESSAGES["LoanRequest"]]


class LoanGrpcService:
    """
    gRPC front door over the same LoanService the REST routes use.
    Each call opens its own session.
    """

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def ProcessLoanRequest(self, request, context):
        try:
            payload = LoanRequest(**{field: getattr(request, field) for field in _REQUEST_FIELDS})
        except ValidationError as exc:
            logger.warning("Rejected malformed gRPC loan request: %s", exc)
            context.abort(grpc.StatusCode.INVALID_ARGUMENT, str(exc))

        with self.session_factory() as db:
            try:
                result = build_loan_service(db).process_loan_request(payload)
            except StaleAccountError as exc:
                logger.warning("Concurrent balance update rejected: %s", exc)
                context.abort(grpc.StatusCode.ABORTED, "Account was modified concurrently, retry the request")
            except SQLAlchemyError as exc:
                logger.exception("Loan request failed (DB error): %s", exc)
                context.abort(grpc.StatusCode.INTERNAL, "Loan service unavailable")

        return pb.LoanResponse(approved=result.approved, message=result.message)

    def GetLoanHistory(self, request, context):
        with self.session_factory() as db:
            try:
                loans = build_loan_service(db).get_loan_history(request.email)
                records = [LoanRecord.model_validate(loan).model_dump(mode="json") for loan in loans]
            except SQLAlchemyError as exc:
                logger.exception("Loan history lookup failed (DB error): %s", exc)
                context.abort(grpc.StatusCode.INTERNAL, "Loan service unavailable")

        # proto3 has no nulls; unset fields fall back to their defaults
        return pb.LoansHistoryResponse(
            loans=[pb.Loan(**{k: v for k, v in record.items() if v is not None}) for record in records]
        )


def add_loan_service_to_server(servicer: LoanGrpcService, server: grpc.Server) -> None:
    history_handler = grpc.unary_unary_rpc_method_handler(
        servicer.GetLoanHistory,
        request_deserializer=pb.LoansHistoryRequest.FromString,
        response_serializer=pb.LoansHistoryResponse.SerializeToString,
    )
    handlers = {
        "ProcessLoanRequest": grpc.unary_unary_rpc_method_handler(
            servicer.ProcessLoanRequest,
            request_deserializer=pb.LoanRequest.FromString,
            response_serializer=pb.LoanResponse.SerializeToString,
        ),
        "GetLoanHistory": history_handler,
        # method name used by existing clients
        "getLoanHistory": history_handler,
    }
    server.add_generic_rpc_handlers((grpc.method_handlers_generic_handler(pb.SERVICE_NAME, handlers),))


class LoanServiceStub:
    """Client for the loan gRPC service."""

    def __init__(self, channel: grpc.Channel):
        self.ProcessLoanRequest = channel.unary_unary(
            f"/{pb.SERVICE_NAME}/ProcessLoanRequest",
            request_serializer=pb.LoanRequest.SerializeToString,
            response_deserializer=pb.LoanResponse.FromString,
        )
        self.GetLoanHistory = channel.unary_unary(
            f"/{pb.SERVICE_NAME}/GetLoanHistory",
            request_serializer=pb.LoansHistoryRequest.SerializeToString,
            response_deserializer=pb.LoansHistoryResponse.FromString,
        )


def create_server(address: str, session_factory=SessionLocal, max_workers: int = 10) -> Tuple[grpc.Server, int]:
    """
    Build (not start) a gRPC server bound to `address`.
    Returns the server and the bound port, so "host:0" picks a free one.
    """
    server = grpc.server(futures.ThreadPoolExecutor(max_workers=max_workers))
    add_loan_service_to_server(LoanGrpcService(session_factory), server)
    port = server.add_insecure_port(address)
    return server, port
