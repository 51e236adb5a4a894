import logging
from datetime import datetime
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from api.schemas.loans import LoanRecord, LoanRequest, LoanResponse
from config import Config, KafkaConfig
from db.crud import AccountStore, LoanStore
from db.lookup import get_lookup_strategy
from db.models import Loan
from services.approval import approve
from services.kafka_producer import publish_loan_decision

logger = logging.getLogger(__name__)

ACCOUNT_NOT_FOUND_MESSAGE = "Email or Account number not found."
LOAN_APPROVED_MESSAGE = "Loan Approved"
LOAN_REJECTED_MESSAGE = "Loan Rejected"

STATUS_APPROVED = "Approved"
STATUS_DECLINED = "Declined"


class LoanService:
    """
    Runs a loan request through identity check, account fetch, approval,
    balance update and audit write.

    Store calls each commit on their own. A failure between the balance
    update and the audit write leaves the balance changed with no loan
    record; nothing here compensates for that.
    """

    def __init__(
        self,
        account_store: AccountStore,
        loan_store: LoanStore,
        optimistic_locking: bool = False,
        event_publisher: Optional[Callable[[dict], None]] = None,
    ):
        self.account_store = account_store
        self.loan_store = loan_store
        self.optimistic_locking = optimistic_locking
        self.event_publisher = event_publisher

    def process_loan_request(self, request: LoanRequest) -> LoanResponse:
        count = self.account_store.count_matching(request.email, request.account_number)
        logger.debug("Accounts matching email=%s account_number=%s: %d", request.email, request.account_number, count)
        if count == 0:
            logger.info(
                "Loan request for account %s rejected: email/account pair not found",
                request.account_number,
            )
            return LoanResponse(approved=False, message=ACCOUNT_NOT_FOUND_MESSAGE)

        # separate lookup by account number only; may disagree with the count above
        account = self.account_store.find_by_account_number(request.account_number)
        if account is None:
            logger.warning(
                "Account %s matched email %s but could not be fetched; declining",
                request.account_number,
                request.email,
            )

        approved, new_balance = approve(account, request.loan_amount)
        if approved:
            expected_version = account.version if self.optimistic_locking else None
            self.account_store.update_balance(request.account_number, new_balance, expected_version=expected_version)

        loan = self.loan_store.insert(self._build_loan(request, approved))
        logger.info(
            "Loan decision for account %s: status=%s, amount=%s",
            request.account_number,
            loan.status,
            request.loan_amount,
        )

        if self.event_publisher is not None:
            self.event_publisher(LoanRecord.model_validate(loan).model_dump(mode="json"))

        return LoanResponse(
            approved=approved,
            message=LOAN_APPROVED_MESSAGE if approved else LOAN_REJECTED_MESSAGE,
        )

    def get_loan_history(self, email: str) -> List[Loan]:
        return self.loan_store.find_by_email(email)

    @staticmethod
    def _build_loan(request: LoanRequest, approved: bool) -> Loan:
        return Loan(
            name=request.name,
            email=request.email,
            account_type=request.account_type,
            account_number=request.account_number,
            govt_id_type=request.govt_id_type,
            govt_id_number=request.govt_id_number,
            loan_type=request.loan_type,
            loan_amount=request.loan_amount,
            interest_rate=request.interest_rate,
            time_period=request.time_period,
            status=STATUS_APPROVED if approved else STATUS_DECLINED,
            timestamp=datetime.now(),
        )


def build_loan_service(db: Session) -> LoanService:
    """
    Wire a LoanService over one session using the current Config.
    Shared by the REST routes and the gRPC servicer.
    """
    return LoanService(
        account_store=AccountStore(db, get_lookup_strategy(Config.ACCOUNT_LOOKUP_STRATEGY)),
        loan_store=LoanStore(db),
        optimistic_locking=Config.OPTIMISTIC_LOCKING,
        event_publisher=publish_loan_decision if KafkaConfig.LOAN_EVENTS_ENABLED else None,
    )
