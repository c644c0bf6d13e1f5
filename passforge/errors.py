"""
passforge.errors
Exception types raised by the generator and the account store.
"""


class PassForgeError(Exception):
    """Base class for every error raised by passforge."""


class InvalidConfig(PassForgeError, ValueError):
    """Raised before any randomness is drawn when a GenerationConfig is unusable."""


class ExhaustedRetries(PassForgeError, RuntimeError):
    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__("Could not generate unique password. Try different options.")


class AccountError(PassForgeError):
    pass


class AuthenticationError(AccountError):
    pass
