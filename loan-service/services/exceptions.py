class StaleAccountError(Exception):
    """
    Raised when an optimistic balance update finds the account version
    changed since it was read. Only possible with OPTIMISTIC_LOCKING enabled.
    """

    def __init__(self, account_number: str, expected_version: int):
        self.account_number = account_number
        self.expected_version = expected_version
        super().__init__(
            f"Account {account_number} changed since version {expected_version} was read"
        )
