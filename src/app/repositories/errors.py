class RepositoryError(Exception):
    """Storage layer failed or is unreachable"""


class DuplicateEmailError(RepositoryError):
    """Unique email constraint rejected an insert"""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"Account with email {email!r} already exists")
